# lambdas/upload_notifier/event_parser.py
import json
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from .models import NotificationRecord, ProcessingResult


class MalformedBatchError(ValueError):
    """The top-level payload is not a sequence of records."""

    def __init__(self, message: str):
        super().__init__(message)
        self.result = ProcessingResult.failed()


class RecordExtractionError(ValueError):
    """A single record lacks a required field or has a wrong-typed one."""
    pass


def parse_batch(payload: Any) -> list:
    """
    Turns the inbound payload into an ordered list of candidate records.

    Accepts an S3 event ({"Records": [...]}), a bare list of records, or a
    JSON string holding either.

    Raises:
        MalformedBatchError: If no sequence of records can be found.
    """
    if isinstance(payload, (str, bytes, bytearray)):
        try:
            payload = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise MalformedBatchError("Payload is a string but not valid JSON.")

    if isinstance(payload, Mapping):
        if 'Records' not in payload:
            raise MalformedBatchError("Payload has no 'Records' key.")
        payload = payload['Records']

    # str is a Sequence too, so it has to be ruled out explicitly
    if not isinstance(payload, Sequence) or isinstance(payload, (str, bytes, bytearray)):
        raise MalformedBatchError(f"Expected a sequence of records, got {type(payload).__name__}.")

    return list(payload)


def extract_record(raw: Any) -> NotificationRecord:
    """
    Pulls bucket/key/size/event out of one raw S3 notification record.

    Raises:
        RecordExtractionError: If a field is missing or has the wrong type.
    """
    try:
        s3 = raw['s3']
        fields = {
            "event_name": raw['eventName'],
            "bucket_name": s3['bucket']['name'],
            "object_key": s3['object']['key'],
            "object_size": s3['object']['size'],
        }
    except KeyError as e:
        raise RecordExtractionError(f"Missing required field: {e.args[0]}")
    except TypeError:
        raise RecordExtractionError("Record is not a nested key-value structure.")

    try:
        return NotificationRecord(**fields)
    except ValidationError as e:
        bad_fields = ", ".join(str(err["loc"][0]) for err in e.errors())
        raise RecordExtractionError(f"Invalid value for: {bad_fields}")
