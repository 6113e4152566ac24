from collections.abc import Sequence

from cardvault.logging.logger import Log
from cardvault.processor.models import FailureKind, StepName
from cardvault.processor.pipeline import (
    SIDE_STEP_ANCHOR,
    TRANSITIONS,
    PipelineStep,
    ProcessingState,
    SideStep,
)


class Processor:
    """Drives one card through the fixed step sequence.

    Pipeline: ingest -> extract -> verify -> enrich -> [side-steps] -> embed -> persist.

    After each step the next one is read from the transition table. The run
    stops at ``StepName.END`` or as soon as a step sets the terminal outcome.
    ``run`` never raises: every failure ends up either as a terminal failure
    outcome or as a warning in ``state.errors``.
    """

    def __init__(
        self,
        steps: Sequence[PipelineStep],
        side_steps: Sequence[SideStep] = (),
        transitions: dict[StepName, StepName] | None = None,
    ) -> None:
        self._steps = {step.name: step for step in steps}
        self._side_steps = list(side_steps)
        self._transitions = transitions or TRANSITIONS
        missing = [name.value for name in self._transitions if name not in self._steps]
        if missing:
            raise ValueError(f"No step registered for {missing}")

    def run(
        self,
        image_data: bytes | str | None,
        content_type: str | None,
        hint: str | None = None,
        enrich: bool = False,
        narrate: bool = False,
        synthesize: bool = False,
    ) -> ProcessingState:
        state = ProcessingState(
            image_data=image_data,
            content_type=content_type,
            hint=hint,
            enrich=enrich,
            narrate=narrate,
            synthesize=synthesize,
        )
        Log.info(f"Processing card (hint: {hint or 'none'}, enrich: {enrich})")
        try:
            self._drive(state)
        except Exception as exc:
            Log.exception(f"Pipeline aborted in {state.current_step}: {exc}")
            if not state.is_terminal:
                state.fail(FailureKind.INTERNAL_ERROR, str(exc))
        if not state.is_terminal:
            state.fail(FailureKind.INTERNAL_ERROR, "Pipeline ended without an outcome")
        if not state.outcome.success:
            Log.error(f"Card processing failed ({state.outcome.kind}): {state.outcome.reason}")
        return state

    def _drive(self, state: ProcessingState) -> None:
        state.next_step = StepName.INGEST
        while state.next_step is not StepName.END and not state.is_terminal:
            step = self._steps[state.next_step]
            self._run_step(step, state)
            if state.is_terminal:
                break
            if step.name is SIDE_STEP_ANCHOR:
                self._run_side_steps(state)
            state.next_step = self._transitions[step.name]

    @staticmethod
    def _run_step(step: PipelineStep, state: ProcessingState) -> None:
        state.current_step = step.name.value
        Log.debug(f"Step {step.name.value} started")
        try:
            step.run(state)
        except Exception as exc:
            if step.failure_kind is None:
                Log.warning(f"Step {step.name.value} failed, continuing: {exc}")
                state.warn(f"{step.name.value}: {exc}")
                return
            if state.outcome is None:
                state.fail(step.failure_kind, str(exc))
            return
        Log.debug(f"Step {step.name.value} completed")

    def _run_side_steps(self, state: ProcessingState) -> None:
        for side_step in self._side_steps:
            if not side_step.enabled(state):
                continue
            state.current_step = side_step.name
            try:
                side_step.run(state)
            except Exception as exc:
                Log.warning(f"Side-step {side_step.name} failed, continuing: {exc}")
                state.warn(f"{side_step.name}: {exc}")
