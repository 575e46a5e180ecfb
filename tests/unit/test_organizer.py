# tests/unit/test_organizer.py

"""Unit tests for the sequential Organizer."""

from unittest.mock import MagicMock

import pytest

from neko import Mock, NekoConfig, Organizer, RegistrationError, RunContext, start


@pytest.fixture
def organizer(ctx: RunContext) -> Organizer:
    return start(ctx)


class TestRegistration:
    """Tests for the registration API."""

    def test_it_and_nit_keep_insertion_order(self, organizer: Organizer):
        organizer.it("a", lambda: None)
        organizer.nit("b", lambda: None)
        organizer.it("c", lambda: None)

        assert [t.name for t in organizer.tests] == ["a", "b", "c"]
        assert [t.is_enabled for t in organizer.tests] == [True, False, True]

    def test_nit_discards_body(self, organizer: Organizer):
        organizer.nit("off", lambda: None)

        assert organizer.tests[0].body is None

    def test_nit_without_body_registers_immediately(self, organizer: Organizer, ctx: RunContext):
        organizer.nit("later")
        organizer.run()

        assert ctx.output == ["==== DISABLED: later ===="]

    def test_nit_as_decorator_returns_function_untouched(self, organizer: Organizer):
        @organizer.nit("off")
        def body():
            pass

        assert callable(body)
        assert len(organizer.tests) == 1
        assert not organizer.tests[0].is_enabled

    def test_base_organizer_cannot_be_instantiated(self, ctx: RunContext):
        from neko.organizer import BaseOrganizer

        with pytest.raises(TypeError):
            BaseOrganizer(ctx)

    def test_decorator_registration(self, organizer: Organizer):
        @organizer.setup
        def prepare():
            pass

        @organizer.it("decorated")
        def body():
            pass

        assert organizer.setup_hooks == [prepare]
        assert organizer.tests[0].body is body

    def test_check_mock_rejects_objects_without_reset_and_verify(self, organizer: Organizer):
        with pytest.raises(RegistrationError, match="reset"):
            organizer.check_mock(object())

    def test_same_mock_can_be_registered_twice(self, organizer: Organizer):
        mock = MagicMock()
        organizer.check_mock(mock)
        organizer.check_mock(mock)
        organizer.it("t", lambda: None)

        organizer.run()

        assert mock.reset.call_count == 2
        assert mock.verify.call_count == 2


class TestRun:
    """Tests for sequencing hooks, bodies and mocks."""

    def test_setup_runs_before_body(self, organizer: Organizer):
        counter = {"value": 0}
        seen = []

        def increment():
            counter["value"] += 1

        def adds():
            seen.append(counter["value"])

        organizer.setup(increment)
        organizer.it("adds", adds)
        organizer.run()

        assert seen == [1]

    def test_setups_run_in_order_before_every_test(self, organizer: Organizer):
        events = []
        organizer.setup(lambda: events.append("s1"))
        organizer.setup(lambda: events.append("s2"))
        organizer.it("t1", lambda: events.append("t1"))
        organizer.it("t2", lambda: events.append("t2"))

        organizer.run()

        assert events == ["s1", "s2", "t1", "s1", "s2", "t2"]

    def test_disabled_test_is_reported_and_skipped(self, organizer: Organizer, ctx: RunContext):
        mock = MagicMock()
        setup = MagicMock()
        skipped_body = MagicMock()
        enabled_body = MagicMock()
        organizer.check_mock(mock)
        organizer.setup(setup)
        organizer.nit("a", skipped_body)
        organizer.it("b", enabled_body)

        organizer.run()

        skipped_body.assert_not_called()
        enabled_body.assert_called_once_with()
        assert setup.call_count == 1
        assert mock.reset.call_count == 1
        assert mock.verify.call_count == 1
        assert ctx.output == ["==== DISABLED: a ====", "==== b ===="]

    def test_mocks_are_reset_and_verified_around_every_test(self, organizer: Organizer, ctx: RunContext):
        events = []
        mock = MagicMock()
        mock.reset.side_effect = lambda: events.append("reset")
        mock.verify.side_effect = lambda c: events.append(("verify", c))
        organizer.check_mock(mock)
        organizer.setup(lambda: events.append("setup"))
        organizer.it("t1", lambda: events.append("t1"))
        organizer.it("t2", lambda: events.append("t2"))

        organizer.run()

        assert events == [
            "reset", "setup", "t1", ("verify", ctx),
            "reset", "setup", "t2", ("verify", ctx),
        ]

    def test_verification_failure_does_not_affect_earlier_test(
        self, organizer: Organizer, ctx: RunContext, foo_mock: Mock
    ):
        organizer.check_mock(foo_mock)
        organizer.setup(lambda: foo_mock.on("Foo").once())
        organizer.it("T1 calls Foo", lambda: foo_mock.foo())
        organizer.it("T2 forgets Foo", lambda: None)
        verified = []
        original_verify = foo_mock.verify
        foo_mock.verify = lambda c: verified.append(original_verify(c))

        organizer.run()

        assert verified == [True, False]
        assert ctx.failures == ["foo: expected Foo() to be called 1 time(s), got 0"]

    def test_expectations_do_not_leak_between_tests(
        self, organizer: Organizer, ctx: RunContext, foo_mock: Mock
    ):
        organizer.check_mock(foo_mock)
        organizer.it("sets an expectation", lambda: foo_mock.on("Foo").maybe())
        organizer.it("sees a clean mock", lambda: foo_mock.assert_number_of_calls("Foo", 0))

        def expects_nothing():
            assert foo_mock.expected_calls == []

        organizer.it("expects nothing", expects_nothing)

        organizer.run()

        assert ctx.failed is False

    def test_body_failure_propagates_and_stops_the_run(self, organizer: Organizer):
        after = MagicMock()

        def broken():
            raise AssertionError("broken")

        organizer.it("broken", broken)
        organizer.it("after", after)

        with pytest.raises(AssertionError, match="broken"):
            organizer.run()

        after.assert_not_called()

    def test_setup_failure_propagates(self, organizer: Organizer):
        body = MagicMock()

        def bad_setup():
            raise RuntimeError("setup exploded")

        organizer.setup(bad_setup)
        organizer.it("t", body)

        with pytest.raises(RuntimeError, match="setup exploded"):
            organizer.run()

        body.assert_not_called()


class TestMeow:
    """Tests for the meow() entry point."""

    def test_meow_logs_summary_then_runs(self, organizer: Organizer, ctx: RunContext):
        body = MagicMock()
        organizer.it("one", body)
        organizer.nit("two", body)

        organizer.meow()

        assert ctx.output[0] == "Meow! Neko is on the case! Running 2 tests now!"
        body.assert_called_once_with()

    def test_banner_can_be_switched_off(self, ctx: RunContext):
        organizer = Organizer(ctx, NekoConfig(banner=False))
        organizer.it("one", lambda: None)

        organizer.meow()

        assert ctx.output == ["==== one ===="]
