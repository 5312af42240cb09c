"""Model for tolerated anomalies reported while parsing."""

from pydantic import BaseModel, ConfigDict


class Diagnostic(BaseModel):
    """A non-fatal problem found on a given input line."""

    model_config = ConfigDict(frozen=True)

    line_number: int
    message: str
