# lambdas/upload_notifier/notifier.py
from typing import Any

from .event_parser import RecordExtractionError, extract_record, parse_batch
from .log_sink import LogEmissionError, LogSink
from .models import ProcessingResult


class UploadNotificationHandler:
    """
    Turns one batch of S3 upload notifications into structured log entries
    and a status summary. Holds no state between calls.
    """

    def __init__(self, sink: LogSink, echo_payload: bool = True):
        self.sink = sink
        self.echo_payload = echo_payload

    def handle(self, payload: Any) -> ProcessingResult:
        """
        Processes every record in the batch, in order.

        Invalid records and failed log writes are counted and skipped; neither
        stops the rest of the batch.

        Raises:
            MalformedBatchError: If the payload is not a sequence of records.
                The error carries the failed result on `.result`.
        """
        records = parse_batch(payload)

        if self.echo_payload:
            self._safe_echo(payload)

        processed = 0
        rejected = 0
        emission_failures = 0

        for i, raw in enumerate(records):
            try:
                record = extract_record(raw)
            except RecordExtractionError as e:
                print(f"⚠️ Rejected record #{i + 1}: {e}")
                rejected += 1
                continue

            try:
                self._emit(record.to_log_entry())
            except LogEmissionError as e:
                print(f"⚠️ Could not log record #{i + 1} (s3://{record.bucket_name}/{record.object_key}): {e}")
                emission_failures += 1
                continue
            processed += 1

        return ProcessingResult.from_counts(
            total=len(records),
            processed=processed,
            rejected=rejected,
            emission_failures=emission_failures,
        )

    def _emit(self, entry: dict) -> None:
        try:
            self.sink.emit(entry)
        except Exception as e:
            raise LogEmissionError(str(e)) from e

    def _safe_echo(self, payload: Any) -> None:
        # The echo is diagnostic only; a failure here must not cost any records.
        try:
            self.sink.echo(payload)
        except Exception as e:
            print(f"⚠️ Could not echo inbound payload: {e}")
