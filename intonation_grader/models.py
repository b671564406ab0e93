"""Serializable comparison output handed to visualization and scoring."""

from pathlib import Path

from pydantic import BaseModel, Field, model_validator


class ContourPoint(BaseModel):
    """One frame of a display contour. A value of 0 means silence."""

    position: int = Field(ge=0)
    value: float = Field(ge=0.0, le=100.0)


class ContourComparison(BaseModel):
    """Reference contour and the attempt warped onto its time axis."""

    reference: list[ContourPoint] = Field(default_factory=list)
    user: list[ContourPoint] = Field(default_factory=list)
    is_fallback: bool = False
    warnings: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_lengths(self) -> "ContourComparison":
        if len(self.reference) != len(self.user):
            raise ValueError(
                f"contours differ in length: {len(self.reference)} != {len(self.user)}"
            )
        return self

    def __len__(self) -> int:
        return len(self.reference)

    def mean_abs_difference(self) -> float:
        """Mean |reference - user| over frames where both are voiced."""
        pairs = [
            (r.value, u.value)
            for r, u in zip(self.reference, self.user)
            if r.value != 0 and u.value != 0
        ]
        if not pairs:
            return 0.0
        return sum(abs(r - u) for r, u in pairs) / len(pairs)

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)

    def to_json_file(self, path: Path) -> None:
        """Write the comparison as JSON, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.to_json())

    @classmethod
    def from_json_file(cls, path: Path) -> "ContourComparison":
        with open(path, encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
