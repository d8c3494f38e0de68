from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from metafold.models import (
    Job,
    JobSubmission,
    License,
    Quota,
    normalize_asset,
    normalize_job,
    parse_timestamp,
)

EPOCH_2024 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_normalize_job_parses_nested_timestamps(new_job, asset_json) -> None:
    payload = {**new_job, "state": "success", "assets": [asset_json]}

    job = normalize_job(payload)

    assert job.created == EPOCH_2024
    assert job.state == "success"
    assert len(job.assets) == 1
    assert job.assets[0].created == EPOCH_2024
    assert job.assets[0].modified == EPOCH_2024
    assert job.assets[0].size == 16777216
    assert job.parameters == {"foo": 1, "bar": "a", "baz": [2, "b"]}
    assert job.meta is None


def test_normalize_job_is_idempotent(new_job, asset_json) -> None:
    job = normalize_job({**new_job, "assets": [asset_json]})

    assert normalize_job(job) == job
    assert normalize_job(job.model_dump()) == job


def test_normalize_asset_accepts_iso_timestamps(asset_json) -> None:
    asset = normalize_asset(
        {**asset_json, "created": "2024-01-01T00:00:00Z", "modified": "2024-01-02T12:30:00+00:00"}
    )
    assert asset.created == EPOCH_2024
    assert asset.modified == datetime(2024, 1, 2, 12, 30, tzinfo=timezone.utc)


def test_parse_timestamp_passes_non_strings_through() -> None:
    assert parse_timestamp(EPOCH_2024) is EPOCH_2024
    assert parse_timestamp(None) is None


def test_job_records_are_frozen(new_job) -> None:
    job = normalize_job(new_job)
    with pytest.raises(ValidationError):
        job.state = "success"  # type: ignore[misc]


def test_job_rejects_unknown_state(new_job) -> None:
    with pytest.raises(ValidationError):
        Job.model_validate({**new_job, "state": "exploded"})


def test_job_submission_requires_type() -> None:
    with pytest.raises(ValidationError):
        JobSubmission(type="  ", parameters={})

    submission = JobSubmission(type="evaluate_graph", parameters={"graph": None})
    assert submission.name is None
    assert submission.model_dump() == {
        "type": "evaluate_graph",
        "parameters": {"graph": None},
        "name": None,
    }


def test_license_and_quota_models() -> None:
    license_ = License.model_validate(
        {
            "issued": "Mon, 01 Jan 2024 00:00:00 GMT",
            "expires": "Wed, 01 Jan 2025 00:00:00 GMT",
            "expired": False,
            "product": "Pro",
        }
    )
    assert license_.issued == EPOCH_2024
    assert license_.expires == datetime(2025, 1, 1, tzinfo=timezone.utc)

    quota = Quota.model_validate({"project": 3, "import": 10, "export": 5, "simulation": 0})
    assert quota.import_ == 10
    assert quota.model_dump(by_alias=True)["import"] == 10
