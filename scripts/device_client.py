"""scripts/device_client.py

Small command-line client for the device registry API. Registers devices,
looks them up and asks the API for the trigger payload of a device, printing
the JSON it gets back.

Usage:
    export API_BASE_URL=http://localhost:8000
    python ./scripts/device_client.py register relay-01 --ip 10.0.0.12 --type gpio-relay --data 65f1c0ffee0000000000beef
    python ./scripts/device_client.py trigger relay-01

"""
from __future__ import annotations
import os
import sys
import json
import argparse
from typing import Optional

import requests
from dotenv import load_dotenv


load_dotenv()


def call_api(method: str, url: str, timeout: int = 10, **kwargs) -> Optional[requests.Response]:
    try:
        return requests.request(method, url, timeout=timeout, **kwargs)
    except requests.RequestException as e:
        print(f"Request to {url} failed: {e}", file=sys.stderr)
        return None


def _json_or_none(r: Optional[requests.Response], url: str):
    if r is None:
        return None
    if r.status_code != 200:
        print(f"Received {r.status_code} from {url}: {r.text}", file=sys.stderr)
        return None
    try:
        return r.json()
    except ValueError as e:
        print(f"Failed to parse JSON from {url}: {e}", file=sys.stderr)
        return None


def register_device(api_base: str, uid: str, ip: str, device_type: str, data: str):
    url = f"{api_base.rstrip('/')}/devices"
    payload = {"uid": uid, "ip": ip, "type": device_type, "data": data}
    return _json_or_none(call_api("POST", url, json=payload), url)


def get_device(api_base: str, uid: str):
    url = f"{api_base.rstrip('/')}/devices/{uid}"
    return _json_or_none(call_api("GET", url), url)


def list_devices(api_base: str):
    url = f"{api_base.rstrip('/')}/devices"
    rows = _json_or_none(call_api("GET", url), url)
    if rows is not None and not isinstance(rows, list):
        print("Expected a list from the devices endpoint but got a single object.", file=sys.stderr)
        return None
    return rows


def trigger_request(api_base: str, uid: str):
    url = f"{api_base.rstrip('/')}/devices/{uid}/trigger"
    return _json_or_none(call_api("POST", url), url)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Register and query relay devices through the registry API",
    )
    parser.add_argument(
        "--api-base",
        default=os.environ.get("API_BASE_URL", "http://localhost:8000"),
        help="API base URL",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    reg = sub.add_parser("register", help="Create or update a device")
    reg.add_argument("uid")
    reg.add_argument("--ip", required=True)
    reg.add_argument("--type", required=True, dest="device_type")
    reg.add_argument("--data", required=True, help="ObjectId of the device's data record")

    get = sub.add_parser("get", help="Show one device")
    get.add_argument("uid")

    sub.add_parser("list", help="Show every device")

    trig = sub.add_parser("trigger", help="Build the trigger request for a device")
    trig.add_argument("uid")

    args = parser.parse_args(argv)

    if args.command == "register":
        result = register_device(args.api_base, args.uid, args.ip, args.device_type, args.data)
    elif args.command == "get":
        result = get_device(args.api_base, args.uid)
    elif args.command == "list":
        result = list_devices(args.api_base)
    else:
        result = trigger_request(args.api_base, args.uid)

    if result is None:
        return 1
    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
