"""Domain exceptions raised by services and mapped to HTTP errors by routers."""

VALIDATION_MESSAGE = "Please fill in your resume and all job titles and descriptions."
NO_JOBS_MESSAGE = "Please add at least one job description."
ANALYSIS_FAILED_MESSAGE = "Failed to analyze job matches. Please try again."


class InputValidationError(ValueError):
    """The form is not complete enough to submit for analysis."""


class AnalysisError(RuntimeError):
    """The remote analysis call failed. Carries no transport detail."""

    def __init__(self, message: str = "analysis failed") -> None:
        super().__init__(message)


class AnalysisInProgressError(RuntimeError):
    """A submission arrived while another analysis is still running."""
