"""Type definitions for the analysis pipeline.

AnalysisResult is the aggregate handed back to the surrounding application.
It is created empty at the start of one analyze() call, filled in as stages
complete and never shared between calls.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from docverify.address.types import AddressMatchResult
from docverify.extraction.types import Transcript
from docverify.tamper.types import TamperResult


class PipelineStage(Enum):
    """Stages of one analysis run."""

    INPUT = "input"  # Magic-byte sanity check of the declared MIME type
    EXTRACT = "extract"  # Transcript via PDF parsing or OCR
    MATCH = "match"  # Address corroboration
    TAMPER = "tamper"  # Region blur/seam heuristic (images only)


@dataclass(frozen=True)
class StageError:
    """A recorded, non-fatal stage failure or degradation note.

    Attributes:
        stage: Stage that produced the entry
        message: Human-readable explanation
    """

    stage: PipelineStage
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"stage": self.stage.value, "message": self.message}


@dataclass
class AnalysisResult:
    """Structured findings for one document.

    Attributes:
        transcript: Extracted text, None if extraction failed or found nothing
        address_match: Address corroboration, None if no transcript was available
        tamper: Tamper heuristic, None for PDFs or if the stage failed
        errors: Stage failures and degradation notes, in the order they occurred
        processing_time_ms: Wall-clock time of the whole run in milliseconds
    """

    transcript: Optional[Transcript] = None
    address_match: Optional[AddressMatchResult] = None
    tamper: Optional[TamperResult] = None
    errors: List[StageError] = field(default_factory=list)
    processing_time_ms: float = 0.0

    def record_error(self, stage: PipelineStage, message: str) -> None:
        """Append a stage error entry."""
        self.errors.append(StageError(stage=stage, message=message))

    def errors_for(self, stage: PipelineStage) -> List[StageError]:
        """Return the entries recorded by one stage."""
        return [error for error in self.errors if error.stage == stage]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        transcript = None
        if self.transcript is not None:
            transcript = {
                "text": self.transcript.text,
                "source_kind": self.transcript.source_kind.value,
            }

        address_match = None
        if self.address_match is not None:
            address_match = asdict(self.address_match)
            address_match["details"]["partial_matches"] = list(
                self.address_match.details.partial_matches
            )

        return {
            "transcript": transcript,
            "address_match": address_match,
            "tamper": asdict(self.tamper) if self.tamper is not None else None,
            "errors": [error.to_dict() for error in self.errors],
            "processing_time_ms": round(self.processing_time_ms, 2),
        }
