#!/usr/bin/env python3
"""Post a sample contact form to a running ContactFlow instance.

Usage:
    python scripts/send_test_submission.py --email you@example.com
    python scripts/send_test_submission.py --verify <token>
"""

import argparse
import json
import sys

import httpx


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--base-url", default="http://127.0.0.1:8000")
    parser.add_argument("--first-name", default="Test")
    parser.add_argument("--last-name", default="Sender")
    parser.add_argument("--email", default="sender@example.com")
    parser.add_argument("--phone", default=None)
    parser.add_argument("--message", default="Hello from send_test_submission.py")
    parser.add_argument("--verify", metavar="TOKEN", help="Call /api/verify-email instead of submitting")
    args = parser.parse_args()

    base_url = args.base_url.rstrip("/")
    with httpx.Client(timeout=30) as client:
        if args.verify:
            response = client.get(f"{base_url}/api/verify-email", params={"token": args.verify})
        else:
            payload = {
                "firstName": args.first_name,
                "lastName": args.last_name,
                "email": args.email,
                "message": args.message,
            }
            if args.phone:
                payload["phone"] = args.phone
            response = client.post(f"{base_url}/api/send-email", json=payload)

    print(response.status_code, json.dumps(response.json(), indent=2))
    return 0 if response.is_success else 1


if __name__ == "__main__":
    sys.exit(main())
