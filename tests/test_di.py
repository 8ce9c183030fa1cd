"""Registry and container tests.

Covers registration, lookup, singleton/prototype resolution, type checks,
cycle detection, failure handling and type-based lookup.
"""

import os
import sys
import threading
import time
import unittest
from abc import ABC, abstractmethod

sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from hello_core.di import BeanRegistry, DIContainer
from hello_core.errors import (
    BeanCreationError,
    BeanNotFoundError,
    ContainerError,
    CyclicDependencyError,
    DuplicateRegistrationError,
    NoUniqueBeanError,
    TypeMismatchError,
)


class Greeter(ABC):
    @abstractmethod
    def greet(self) -> str:
        raise NotImplementedError


class EnglishGreeter(Greeter):
    def greet(self) -> str:
        return "hello"


class KoreanGreeter(Greeter):
    def greet(self) -> str:
        return "annyeong"


class Holder:
    def __init__(self, *parts):
        self.parts = parts


# =============================================================================
# Registry
# =============================================================================

class TestBeanRegistry(unittest.TestCase):
    def setUp(self):
        self.registry = BeanRegistry()

    def test_register_and_lookup(self):
        descriptor = self.registry.register("greeter", Greeter, EnglishGreeter)
        self.assertIs(self.registry.lookup("greeter"), descriptor)
        self.assertEqual(descriptor.declared_type, Greeter)
        self.assertEqual(descriptor.dependencies, ())
        self.assertTrue(descriptor.singleton)

    def test_duplicate_registration(self):
        self.registry.register("greeter", Greeter, EnglishGreeter)
        with self.assertRaises(DuplicateRegistrationError) as ctx:
            self.registry.register("greeter", Greeter, KoreanGreeter)
        self.assertEqual(ctx.exception.identifier, "greeter")
        # First registration survives
        self.assertIs(self.registry.lookup("greeter").factory, EnglishGreeter)

    def test_lookup_missing(self):
        with self.assertRaises(BeanNotFoundError) as ctx:
            self.registry.lookup("nope")
        self.assertEqual(ctx.exception.identifier, "nope")

    def test_rejects_malformed_registrations(self):
        with self.assertRaises(ContainerError):
            self.registry.register("", Greeter, EnglishGreeter)
        with self.assertRaises(ContainerError):
            self.registry.register("greeter", Greeter, "not callable")
        with self.assertRaises(ContainerError):
            self.registry.register("greeter", "Greeter", EnglishGreeter)
        self.assertEqual(len(self.registry), 0)

    def test_names_keep_registration_order(self):
        self.registry.register("b", Greeter, EnglishGreeter)
        self.registry.register("a", Greeter, KoreanGreeter)
        self.assertEqual(self.registry.names(), ["b", "a"])
        self.assertIn("a", self.registry)
        self.assertTrue(self.registry.contains("b"))
        self.assertFalse(self.registry.contains("c"))

    def test_candidates_for_subclasses(self):
        self.registry.register("en", EnglishGreeter, EnglishGreeter)
        self.registry.register("holder", Holder, Holder)
        names = [d.identifier for d in self.registry.candidates_for(Greeter)]
        self.assertEqual(names, ["en"])


# =============================================================================
# Container
# =============================================================================

class TestContainerResolution(unittest.TestCase):
    def setUp(self):
        self.container = DIContainer()

    def test_get_bean_returns_expected_type(self):
        self.container.register("greeter", Greeter, EnglishGreeter)
        greeter = self.container.get_bean("greeter", Greeter)
        self.assertIsInstance(greeter, EnglishGreeter)
        self.assertEqual(greeter.greet(), "hello")

    def test_singleton_is_reference_equal(self):
        self.container.register("greeter", Greeter, EnglishGreeter)
        first = self.container.get_bean("greeter", Greeter)
        second = self.container.get_bean("greeter", Greeter)
        self.assertIs(first, second)
        self.assertTrue(self.container.is_singleton("greeter"))

    def test_prototype_builds_new_instance(self):
        self.container.register("greeter", Greeter, EnglishGreeter, singleton=False)
        self.assertIsNot(
            self.container.get_bean("greeter"), self.container.get_bean("greeter")
        )
        self.assertFalse(self.container.is_singleton("greeter"))

    def test_unknown_identifier(self):
        with self.assertRaises(BeanNotFoundError):
            self.container.get_bean("missing", Greeter)

    def test_expected_type_mismatch(self):
        self.container.register("holder", Holder, Holder)
        with self.assertRaises(TypeMismatchError) as ctx:
            self.container.get_bean("holder", Greeter)
        self.assertIs(ctx.exception.expected, Greeter)
        self.assertIs(ctx.exception.actual, Holder)

    def test_expected_type_mismatch_keeps_cached_singleton(self):
        self.container.register("holder", Holder, Holder)
        first = self.container.get_bean("holder")
        with self.assertRaises(TypeMismatchError):
            self.container.get_bean("holder", Greeter)
        self.assertIs(self.container.get_bean("holder", Holder), first)

    def test_factory_product_must_match_declared_type(self):
        self.container.register("greeter", Greeter, Holder)
        with self.assertRaises(TypeMismatchError):
            self.container.get_bean("greeter")
        # Not cached: the next attempt fails the same way
        with self.assertRaises(TypeMismatchError):
            self.container.get_bean("greeter")

    def test_dependencies_resolved_depth_first(self):
        created = []

        def make(name):
            def factory(*deps):
                created.append(name)
                return Holder(*deps)
            return factory

        self.container.register("a", Holder, make("a"), ("b", "c"))
        self.container.register("b", Holder, make("b"), ("c",))
        self.container.register("c", Holder, make("c"))

        a = self.container.get_bean("a", Holder)
        self.assertEqual(created, ["c", "b", "a"])
        b, c = a.parts
        self.assertIs(b.parts[0], c)
        self.assertIs(self.container.get_bean("c"), c)

    def test_missing_dependency(self):
        self.container.register("a", Holder, Holder, ("ghost",))
        with self.assertRaises(BeanNotFoundError) as ctx:
            self.container.get_bean("a")
        self.assertEqual(ctx.exception.identifier, "ghost")

    def test_register_instance(self):
        greeter = KoreanGreeter()
        self.container.register_instance("greeter", greeter)
        self.assertIs(self.container.get_bean("greeter", Greeter), greeter)
        with self.assertRaises(DuplicateRegistrationError):
            self.container.register_instance("greeter", EnglishGreeter())

    def test_bean_names_and_contains(self):
        self.container.register("en", Greeter, EnglishGreeter)
        self.container.register("ko", Greeter, KoreanGreeter)
        self.assertEqual(self.container.bean_names(), ["en", "ko"])
        self.assertTrue(self.container.contains_bean("ko"))
        self.assertFalse(self.container.contains_bean("fr"))


class TestContainerCycles(unittest.TestCase):
    def setUp(self):
        self.container = DIContainer()

    def test_two_bean_cycle(self):
        self.container.register("a", Holder, Holder, ("b",))
        self.container.register("b", Holder, Holder, ("a",))
        with self.assertRaises(CyclicDependencyError) as ctx:
            self.container.get_bean("a")
        self.assertEqual(ctx.exception.chain, ["a", "b", "a"])

    def test_self_cycle(self):
        self.container.register("a", Holder, Holder, ("a",))
        with self.assertRaises(CyclicDependencyError) as ctx:
            self.container.get_bean("a")
        self.assertEqual(ctx.exception.chain, ["a", "a"])

    def test_cycle_through_type_dependency(self):
        self.container.register("a", Holder, Holder, (Greeter,))
        self.container.register("greeter", EnglishGreeter, lambda holder: EnglishGreeter(), ("a",))
        with self.assertRaises(CyclicDependencyError):
            self.container.get_bean("a")

    def test_cycle_from_factory_calling_container(self):
        self.container.register("loop", Holder, lambda: self.container.get_bean("loop"))
        with self.assertRaises(CyclicDependencyError):
            self.container.get_bean("loop")

    def test_container_usable_after_cycle(self):
        self.container.register("a", Holder, Holder, ("b",))
        self.container.register("b", Holder, Holder, ("a",))
        self.container.register("ok", Holder, Holder)
        with self.assertRaises(CyclicDependencyError):
            self.container.get_bean("a")
        with self.assertRaises(CyclicDependencyError) as ctx:
            self.container.get_bean("b")
        self.assertEqual(ctx.exception.chain, ["b", "a", "b"])
        self.assertIsInstance(self.container.get_bean("ok"), Holder)


class TestContainerFailures(unittest.TestCase):
    def setUp(self):
        self.container = DIContainer()

    def test_factory_error_is_wrapped(self):
        def broken():
            raise RuntimeError("boom")

        self.container.register("broken", Holder, broken)
        with self.assertRaises(BeanCreationError) as ctx:
            self.container.get_bean("broken")
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)
        self.assertIn("boom", str(ctx.exception))

    def test_failed_resolution_is_retried(self):
        calls = {"n": 0}

        def flaky():
            calls["n"] += 1
            if calls["n"] == 1:
                raise RuntimeError("first call fails")
            return Holder()

        self.container.register("flaky", Holder, flaky)
        with self.assertRaises(BeanCreationError):
            self.container.get_bean("flaky")
        instance = self.container.get_bean("flaky")
        self.assertIsInstance(instance, Holder)
        self.assertIs(self.container.get_bean("flaky"), instance)
        self.assertEqual(calls["n"], 2)

    def test_dependent_not_cached_when_dependency_fails(self):
        calls = {"n": 0}

        def dep():
            calls["n"] += 1
            if calls["n"] == 1:
                raise ValueError("not yet")
            return Holder()

        self.container.register("dep", Holder, dep)
        self.container.register("top", Holder, Holder, ("dep",))
        with self.assertRaises(BeanCreationError):
            self.container.get_bean("top")
        top = self.container.get_bean("top")
        self.assertIs(top.parts[0], self.container.get_bean("dep"))


class TestContainerTypeLookup(unittest.TestCase):
    def setUp(self):
        self.container = DIContainer()

    def test_unique_candidate(self):
        self.container.register("en", Greeter, EnglishGreeter)
        self.container.register("holder", Holder, Holder)
        greeter = self.container.get_bean_by_type(Greeter)
        self.assertIs(greeter, self.container.get_bean("en"))

    def test_no_candidate(self):
        with self.assertRaises(BeanNotFoundError):
            self.container.get_bean_by_type(Greeter)

    def test_several_candidates(self):
        self.container.register("en", Greeter, EnglishGreeter)
        self.container.register("ko", Greeter, KoreanGreeter)
        with self.assertRaises(NoUniqueBeanError) as ctx:
            self.container.get_bean_by_type(Greeter)
        self.assertEqual(ctx.exception.candidates, ["en", "ko"])

    def test_beans_of_type(self):
        self.container.register("en", Greeter, EnglishGreeter)
        self.container.register("ko", Greeter, KoreanGreeter)
        self.container.register("holder", Holder, Holder)
        beans = self.container.beans_of_type(Greeter)
        self.assertEqual(sorted(beans), ["en", "ko"])
        self.assertEqual(beans["ko"].greet(), "annyeong")

    def test_type_dependency(self):
        self.container.register("en", Greeter, EnglishGreeter)
        self.container.register("holder", Holder, Holder, (Greeter,))
        holder = self.container.get_bean("holder", Holder)
        self.assertIs(holder.parts[0], self.container.get_bean("en"))


class TestPreinstantiate(unittest.TestCase):
    def test_builds_singletons_only(self):
        container = DIContainer()
        created = []
        container.register("en", Greeter, lambda: created.append("en") or EnglishGreeter())
        container.register(
            "proto", Holder, lambda: created.append("proto") or Holder(), singleton=False
        )
        container.register_instance("ko", KoreanGreeter())

        self.assertEqual(container.preinstantiate_singletons(), 1)
        self.assertEqual(created, ["en"])
        # Already cached, nothing left to build
        self.assertEqual(container.preinstantiate_singletons(), 0)

    def test_counts_dependencies_built_along_the_way(self):
        container = DIContainer()
        # Dependent registered before its dependency
        container.register("svc", Holder, Holder, ("repo",))
        container.register("repo", Holder, Holder)

        self.assertEqual(container.preinstantiate_singletons(), 2)
        self.assertEqual(container.preinstantiate_singletons(), 0)


class TestContainerThreads(unittest.TestCase):
    def test_concurrent_resolution_builds_once(self):
        container = DIContainer()
        calls = []

        def slow_factory():
            calls.append(threading.get_ident())
            time.sleep(0.01)
            return Holder()

        container.register("slow", Holder, slow_factory)

        workers = 16
        barrier = threading.Barrier(workers)
        results = [None] * workers

        def worker(index):
            barrier.wait()
            results[index] = container.get_bean("slow", Holder)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(workers)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        self.assertEqual(len(calls), 1)
        self.assertIsNotNone(results[0])
        for result in results:
            self.assertIs(result, results[0])


class TestContainerLogging(unittest.TestCase):
    def setUp(self):
        self.container = DIContainer()

    def test_nested_failure_logged_once(self):
        self.container.register("a", Holder, Holder, ("b",))
        self.container.register("b", Holder, Holder, ("c",))
        self.container.register("c", Holder, Holder, ("a",))
        with self.assertLogs("hello_core.di", level="WARNING") as logs:
            with self.assertRaises(CyclicDependencyError):
                self.container.get_bean("a")
        self.assertEqual(len(logs.records), 1)
        self.assertIn("'a'", logs.output[0])

    def test_type_lookup_without_candidate_is_logged(self):
        with self.assertLogs("hello_core.di", level="WARNING") as logs:
            with self.assertRaises(BeanNotFoundError):
                self.container.get_bean_by_type(Greeter)
        self.assertEqual(len(logs.records), 1)
        self.assertIn("Greeter", logs.output[0])

    def test_ambiguous_type_lookup_is_logged(self):
        self.container.register("en", Greeter, EnglishGreeter)
        self.container.register("ko", Greeter, KoreanGreeter)
        with self.assertLogs("hello_core.di", level="WARNING") as logs:
            with self.assertRaises(NoUniqueBeanError):
                self.container.get_bean_by_type(Greeter)
        self.assertEqual(len(logs.records), 1)


if __name__ == "__main__":
    unittest.main()
