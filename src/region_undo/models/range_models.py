"""Line range model shared by every stage of the walk."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LineRange(BaseModel):
    """A 1-based, inclusive range of lines in one snapshot of a file."""

    model_config = ConfigDict(frozen=True)

    start_line: int = Field(ge=1)
    end_line: int = Field(ge=1)

    @model_validator(mode="after")
    def _check_order(self) -> "LineRange":
        if self.start_line > self.end_line:
            raise ValueError(
                f"start_line ({self.start_line}) must not exceed end_line ({self.end_line})"
            )
        return self

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1

    def contains(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line

    def log_spec(self) -> str:
        """Return the ``start,end`` form used by ``git log -L``."""
        return f"{self.start_line},{self.end_line}"
