"""Fetch raw schema text from a file, stdin or a GraphQL endpoint."""

import sys
from pathlib import Path
from typing import Any

import httpx

from .errors import FetchError
from .parser import collect_schema_files

# Requests exactly the keys understood by introspection.py, so the
# response also passes strict validation.
INTROSPECTION_QUERY = """
query IntrospectionQuery {
  __schema {
    types {
      kind
      name
      fields(includeDeprecated: true) {
        name
        args {
          name
          type { ...TypeRef }
        }
        type { ...TypeRef }
      }
      inputFields {
        name
        type { ...TypeRef }
      }
      enumValues(includeDeprecated: true) {
        name
      }
    }
  }
}

fragment TypeRef on __Type {
  kind
  name
  ofType {
    kind
    name
    ofType {
      kind
      name
      ofType {
        kind
        name
        ofType {
          kind
          name
          ofType {
            kind
            name
            ofType {
              kind
              name
              ofType {
                kind
                name
              }
            }
          }
        }
      }
    }
  }
}
"""


def read_file(path: str | Path) -> str:
    """Read SDL from a file, or from every schema file in a directory."""
    path = Path(path)
    if not path.exists():
        raise FetchError(f"Schema path {path} does not exist")
    try:
        files = collect_schema_files(str(path))
        if path.is_dir() and not files:
            raise FetchError(f"No .graphql or .graphqls files found in {path}")
        return "\n".join(Path(file).read_text(encoding="utf-8") for file in files)
    except OSError as e:
        raise FetchError(f"Unable to read schema from {path}: {e}") from e


def read_pipe() -> str:
    """Read the whole of stdin."""
    try:
        return sys.stdin.read()
    except OSError as e:
        raise FetchError(f"Unable to read schema from stdin: {e}") from e


async def read_endpoint(
    url: str,
    headers: dict[str, str] | None = None,
    timeout: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """POST the introspection query to `url` and return the response body."""
    request_headers = {"Content-Type": "application/json"}
    request_headers.update(headers or {})
    try:
        async with httpx.AsyncClient(
            timeout=timeout, headers=request_headers, transport=transport
        ) as client:
            response = await client.post(url, json=_introspection_payload())
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise FetchError(
            f"Introspection request to {url} failed with HTTP {e.response.status_code}"
        ) from e
    except httpx.HTTPError as e:
        raise FetchError(f"Introspection request to {url} failed: {e}") from e
    return response.text


def _introspection_payload() -> dict[str, Any]:
    return {"query": INTROSPECTION_QUERY, "operationName": "IntrospectionQuery"}
