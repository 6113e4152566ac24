import json
import random
from datetime import datetime, timezone

from cardvault.logging.logger import Log
from cardvault.media.base import BaseNarrator, BaseSyntheticImageClient
from cardvault.media.synthetic import edit_prompt, synthetic_attributes
from cardvault.processor.pipeline import ProcessingState, SideStep
from cardvault.storage.local_store import LocalFileStore


class SyntheticSampleStep(SideStep):
    """Produces an edited copy of the card image carrying random label data.

    If the edit fails, a JSON file describing the intended edit is stored in
    its place.
    """

    name = "synthetic_sample"

    def __init__(
        self,
        image_client: BaseSyntheticImageClient,
        file_store: LocalFileStore,
        rng: random.Random | None = None,
    ) -> None:
        self._image_client = image_client
        self._file_store = file_store
        self._rng = rng or random.Random()

    def enabled(self, state: ProcessingState) -> bool:
        return state.synthesize

    def run(self, state: ProcessingState) -> ProcessingState:
        original = state.require_attributes()
        synthetic = synthetic_attributes(self._rng)
        prompt = edit_prompt(synthetic)
        state.synthetic_attributes = synthetic
        try:
            edited = self._image_client.edit(state.image_bytes, state.image_content_type, prompt)
        except Exception as exc:
            Log.warning(f"Image editing failed, saving metadata instead: {exc}")
            state.warn(f"Synthetic image edit failed: {exc}")
            metadata = {
                "original_card": original.to_dict(),
                "synthetic_card": synthetic.to_dict(),
                "edit_prompt": prompt,
                "error": str(exc),
                "created_at": datetime.now(timezone.utc).isoformat(),
            }
            state.synthetic_sample_path = self._file_store.save(
                "synthetic",
                f"{original.identifier}_synthetic_metadata",
                json.dumps(metadata, indent=2).encode("utf-8"),
                "application/json",
            )
            return state
        state.synthetic_sample_path = self._file_store.save(
            "synthetic", f"{original.identifier}_synthetic", edited, "image/png"
        )
        Log.info(f"Synthetic sample saved to {state.synthetic_sample_path}")
        return state


class NarrationStep(SideStep):
    """Speaks the card description and stores the audio."""

    name = "narration"

    def __init__(self, narrator: BaseNarrator, file_store: LocalFileStore) -> None:
        self._narrator = narrator
        self._file_store = file_store

    def enabled(self, state: ProcessingState) -> bool:
        return state.narrate

    def run(self, state: ProcessingState) -> ProcessingState:
        if not state.description:
            Log.warning("No description available for audio narration")
            return state
        identifier = state.require_attributes().identifier
        audio = self._narrator.narrate(state.description)
        state.narration_path = self._file_store.save(
            "audio", identifier, audio, self._narrator.content_type
        )
        Log.info(f"Audio narration saved to {state.narration_path}")
        return state
