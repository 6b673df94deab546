"""Command-line client of a kindstore server.

Usage:
    kindstore-client --server http://localhost:8000 --backup-dir ./backup \\
        --user-name admin --password secret --repository-names
    kindstore-client ... --writable false
    kindstore-client ... --backup
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import httpx

BACKUP_PAGE_SIZE = 100


class KindstoreClient:
    """Thin httpx wrapper over the /v1/repositories endpoints."""

    def __init__(self, server: str, http: httpx.Client | None = None) -> None:
        self._server = server.rstrip("/")
        self._http = http or httpx.Client(timeout=60.0)

    def close(self) -> None:
        self._http.close()

    def repository_names(self) -> list[str]:
        r = self._http.get(f"{self._server}/v1/repositories")
        r.raise_for_status()
        return r.json()["repositoryNames"]

    def set_writable(self, writable: bool, user_name: str, password: str) -> bool:
        r = self._http.put(
            f"{self._server}/v1/repositories/writable",
            params={
                "writable": "true" if writable else "false",
                "userName": user_name,
                "password": password,
            },
        )
        r.raise_for_status()
        return r.json()["writable"]

    def get_page(self, name: str, page: int, size: int) -> dict[str, Any]:
        r = self._http.get(
            f"{self._server}/v1/repositories/{name}/documents",
            params={"page": page, "size": size},
        )
        r.raise_for_status()
        return r.json()

    def dump(self, name: str, page_size: int = BACKUP_PAGE_SIZE) -> list[dict[str, Any]]:
        """Every document of a repository, fetched page by page."""
        documents: list[dict[str, Any]] = []
        page = 1
        while True:
            body = self.get_page(name, page, page_size)
            documents.extend(body["results"])
            if page >= body["pagination"]["pageCount"]:
                return documents
            page += 1


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got [{raw}]")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kindstore-client", description="Administer a kindstore server"
    )
    parser.add_argument("--server", required=True, help="Server base URL, e.g. http://localhost:8000")
    parser.add_argument("--backup-dir", required=True, help="Directory backups are written to")
    parser.add_argument("--user-name", required=True, help="Admin user name")
    parser.add_argument("--password", required=True, help="Admin password")
    parser.add_argument(
        "--repository-names", action="store_true", help="Print the served repository names"
    )
    parser.add_argument(
        "--writable", type=_parse_bool, metavar="true|false", help="Switch repositories writability"
    )
    parser.add_argument(
        "--backup", action="store_true", help="Dump every repository into <backup-dir>/<name>.json"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Print progress")
    return parser


def backup(client: KindstoreClient, backup_dir: Path, verbose: bool = False) -> list[Path]:
    backup_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for name in client.repository_names():
        documents = client.dump(name)
        path = backup_dir / f"{name}.json"
        path.write_text(json.dumps(documents, ensure_ascii=False, indent=2), encoding="utf-8")
        written.append(path)
        if verbose:
            print(f"Backed up {len(documents)} documents of [{name}] to {path}")
    return written


def main(argv: list[str] | None = None, http: httpx.Client | None = None) -> int:
    args = build_parser().parse_args(argv)
    client = KindstoreClient(args.server, http)
    try:
        if args.verbose:
            print(f"Server: {args.server}")

        if args.repository_names:
            for name in client.repository_names():
                print(name)

        if args.writable is not None:
            writable = client.set_writable(args.writable, args.user_name, args.password)
            print(f"Repositories writable: {str(writable).lower()}")

        if args.backup:
            backup(client, Path(args.backup_dir), args.verbose)
    except httpx.HTTPStatusError as e:
        print(f"Request failed: {e.response.status_code} {e.response.text}", file=sys.stderr)
        return 1
    except httpx.HTTPError as e:
        print(f"Request failed: {e}", file=sys.stderr)
        return 1
    finally:
        client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
