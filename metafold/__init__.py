"""Python client for the Metafold API."""

from .client import MetafoldClient
from .config import Settings, get_settings
from .errors import (
    ApiError,
    JobFailure,
    JobTimeoutError,
    MetafoldError,
    PollCancelled,
    PollTimeout,
    TransportError,
    ValidationError,
)
from .models import Asset, Job, JobSubmission, License, Quota, Usage, normalize_job
from .util import construct_params

__all__ = [
    "ApiError",
    "Asset",
    "Job",
    "JobFailure",
    "JobSubmission",
    "JobTimeoutError",
    "License",
    "MetafoldClient",
    "MetafoldError",
    "PollCancelled",
    "PollTimeout",
    "Quota",
    "Settings",
    "TransportError",
    "Usage",
    "ValidationError",
    "construct_params",
    "get_settings",
    "normalize_job",
]
