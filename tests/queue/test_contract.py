from wizard_cli.queue.contract import (
    Batch,
    Step,
    SupportsCompletedPrefix,
    SupportsInProgressPrefix,
    batch,
    flatten_actions,
)
from wizard_cli.steps import ActionStep, ConfirmStep


def first():
    return "first"


def second():
    return "second"


class TestBatch:
    def test_empty_batch_is_none(self) -> None:
        assert batch() is None
        assert batch(None, None) is None

    def test_drops_none_and_flattens(self) -> None:
        combined = batch(first, None, batch(second, first))
        assert combined == Batch((first, second, first))

    def test_flatten_actions(self) -> None:
        actions = list(flatten_actions([None, Batch((first,)), second]))
        assert actions == [first, second]


class TestCapabilities:
    def test_bundled_steps_support_numbering(self) -> None:
        step = ConfirmStep("Continue?")
        assert isinstance(step, Step)
        assert isinstance(step, SupportsCompletedPrefix)
        assert isinstance(step, SupportsInProgressPrefix)

    def test_minimal_step_has_no_numbering(self, fake_steps) -> None:
        (step,) = fake_steps(1)
        assert isinstance(step, Step)
        assert not isinstance(step, SupportsCompletedPrefix)

    def test_objects_without_the_contract_are_not_steps(self) -> None:
        assert not isinstance(object(), Step)
        assert isinstance(ActionStep("Run", first), Step)
