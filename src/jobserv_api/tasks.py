"""Invoke tasks for the JobServ API client.

The repository root tasks.py exposes this collection: invoke request --path=...
"""

import json
import sys

from invoke import Collection, task

from .api import JobServClient
from .client.models import RequestDescriptor
from .config.logging import bootstrap_logging
from .config.settings import print_settings_table
from .exceptions import ConfigurationError, HTTPError


def _parse_query(query):
    """Parse 'key=value' pairs; repeated keys become lists in order."""
    parsed = {}
    for item in query or []:
        key, _, value = item.partition('=')
        if key in parsed:
            existing = parsed[key]
            parsed[key] = (existing if isinstance(existing, list) else [existing]) + [value]
        else:
            parsed[key] = value
    return parsed


@task(
    iterable=['query', 'header'],
    help={
        'path': 'Request path relative to the service root (e.g., ota/devices/)',
        'verb': 'HTTP verb (default: GET)',
        'query': 'Query parameter as key=value (repeatable)',
        'header': 'Header as Name:Value (repeatable)',
        'data': 'Request body; parsed as JSON when valid, sent as text otherwise',
        'pages': 'Print pagination metadata to stderr',
        'debug': 'Enable debug logging (sets LOG_LEVEL=DEBUG)',
    },
)
def request(ctx, path='', verb='GET', query=None, header=None, data=None, pages=False, debug=False):
    """
    Issue one request against the configured JobServ service.

    The decoded body goes to stdout; status and errors go to stderr.

    Examples:
        invoke request --path=ota/devices/ --query=page=2
        invoke request --path=projects/lmp/builds/42/runs/qemu/cancel --verb=POST
    """
    if debug:
        import os
        os.environ['LOG_LEVEL'] = 'DEBUG'
    bootstrap_logging(__name__)

    body = data
    if data is not None:
        try:
            body = json.loads(data)
        except ValueError:
            body = data

    headers = {}
    for item in header or []:
        name, _, value = item.partition(':')
        headers[name.strip()] = value.strip()

    try:
        client = JobServClient.from_settings()
        descriptor = RequestDescriptor(
            path=path, verb=verb, query=_parse_query(query) or None, headers=headers or None, body=body,
        )
        response = client.request(descriptor)
    except ConfigurationError as e:
        print(e.guidance, file=sys.stderr)
        return False
    except HTTPError as e:
        print(e.guidance, file=sys.stderr)
        if e.json is not None:
            print(json.dumps(e.json, indent=2))
        elif e.text:
            print(e.text)
        return False
    except ValueError as e:
        print(f"❌ Invalid request: {e}", file=sys.stderr)
        return False

    print(f"✅ HTTP {response.status}", file=sys.stderr)
    if pages:
        print(f"   Pagination: {response.pagination()}", file=sys.stderr)

    payload = response.json()
    if payload is not None:
        print(json.dumps(payload, indent=2))
    elif response.is_text():
        print(response.text())
    elif response.buffer():
        sys.stdout.buffer.write(response.buffer())
    return True


@task
def settings(ctx):
    """Show the resolved client settings."""
    print_settings_table()


@task(help={'pattern': 'Only run tests matching this expression (pytest -k)'})
def test(ctx, pattern=None):
    """Run the test suite."""
    command = 'python -m pytest tests'
    if pattern:
        command += f" -k '{pattern}'"
    ctx.run(command, pty=True)


namespace = Collection(request, settings, test)
