# lambdas/upload_notifier/app.py
import logging

from .event_parser import MalformedBatchError
from .log_sink import LoggingSink
from .models import ProcessingResult, get_settings
from .notifier import UploadNotificationHandler


# Build the sink and handler once so warm invocations reuse them.
settings = get_settings()
logging.basicConfig(level=settings.log_level)
NOTIFIER = UploadNotificationHandler(
    sink=LoggingSink(name=settings.logger_name),
    echo_payload=settings.echo_payload,
)


def handler(event, context) -> dict:
    """
    Lambda entry point, triggered by S3 ObjectCreated notifications.
    """
    print("--- Upload Notifier Lambda Triggered ---")

    try:
        result = NOTIFIER.handle(event)
    except MalformedBatchError as e:
        print(f"❌ Malformed notification batch: {e}")
        return e.result.to_response()
    except Exception as e:
        # Retrying would fail the same way, so report failure instead of raising.
        print(f"❌ An unexpected error occurred while processing the batch: {e}")
        return ProcessingResult.failed().to_response()

    response = result.to_response()
    print(f"✅ Batch complete: {response}")
    return response
