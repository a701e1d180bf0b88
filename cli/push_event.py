import os
import json
import argparse
from datetime import datetime, timezone

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from dotenv import load_dotenv

# Load environment variables from a .env file for local testing
load_dotenv()

AWS_REGION = os.environ.get("AWS_REGION", "us-east-1")
UPLOAD_BUCKET = os.environ.get("UPLOAD_BUCKET")


def create_s3_event(bucket: str, key: str, size: int, event_name: str = "ObjectCreated:Put") -> dict:
    """
    Builds an S3 notification payload shaped like the one the Lambda receives.
    """
    return {
        "Records": [
            {
                "eventVersion": "2.1",
                "eventSource": "aws:s3",
                "awsRegion": AWS_REGION,
                "eventTime": datetime.now(timezone.utc).isoformat(),
                "eventName": event_name,
                "s3": {
                    "s3SchemaVersion": "1.0",
                    "bucket": {"name": bucket, "arn": f"arn:aws:s3:::{bucket}"},
                    "object": {"key": key, "size": size},
                },
            }
        ]
    }


def invoke_local(event: dict) -> dict:
    """
    Runs the Lambda handler in-process against the given event.
    """
    # Imported lazily so settings are read after load_dotenv()
    from lambdas.upload_notifier.app import handler
    return handler(event, None)


def upload_test_object(bucket: str, key: str, body: bytes, s3_client=None) -> bool:
    """
    Uploads a small object so the real S3 trigger fires. Returns True on success.
    """
    if not bucket:
        print("❌ ERROR: No bucket given. Set UPLOAD_BUCKET in a .env file or pass --bucket.")
        return False

    s3_client = s3_client or boto3.client('s3', region_name=AWS_REGION)
    print(f"Uploading {len(body)} bytes to s3://{bucket}/{key} ...")
    try:
        s3_client.put_object(Bucket=bucket, Key=key, Body=body)
    except (ClientError, BotoCoreError) as e:
        print(f"\n❌ Failed to upload test object.")
        print(f"Error: {e}")
        return False

    print("✅ Upload complete. Check the function's CloudWatch log group for the entry.")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Sends a sample S3 upload notification to the Upload Notifier."
    )
    parser.add_argument('--bucket', default=UPLOAD_BUCKET or "my-demo-bucket", help='Target bucket name.')
    parser.add_argument('--key', default="sample.txt", help='Object key to report.')
    parser.add_argument('--body', default="Hello from the upload notifier test CLI.\n", help='Content of the test object.')
    parser.add_argument('--upload', action='store_true', help='Upload a real object instead of invoking locally.')

    args = parser.parse_args()
    body = args.body.encode('utf-8')

    if args.upload:
        upload_test_object(args.bucket, args.key, body)
    else:
        event = create_s3_event(args.bucket, args.key, len(body))
        print("--- Sample Event ---")
        print(json.dumps(event, indent=4))
        print("--------------------")
        print(f"Result: {json.dumps(invoke_local(event))}")
