"""Unit tests for the kindstore-client command line."""

import json

import httpx
import pytest

from kindstore.interfaces.cli.client import KindstoreClient, build_parser, main

REQUIRED = ["--server", "http://kindstore", "--user-name", "admin", "--password", "secret"]


def _server(requests: list[httpx.Request]) -> httpx.Client:
    """Fake server with one repository of three documents, served two per page."""
    documents = [{"oId": str(i), "n": i} for i in range(3)]

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        path = request.url.path
        if path == "/v1/repositories":
            return httpx.Response(200, json={"repositoryNames": ["articles"]})
        if path == "/v1/repositories/writable":
            if request.url.params["password"] != "secret":
                return httpx.Response(401, json={"error": "Unauthorized"})
            return httpx.Response(200, json={"writable": request.url.params["writable"] == "true"})
        if path == "/v1/repositories/articles/documents":
            page = int(request.url.params["page"])
            size = int(request.url.params["size"])
            return httpx.Response(
                200,
                json={
                    "pagination": {"pageCount": -(-len(documents) // size)},
                    "results": documents[(page - 1) * size : page * size],
                },
            )
        return httpx.Response(404)

    return httpx.Client(transport=httpx.MockTransport(handler))


def test_required_arguments() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--server", "http://kindstore"])


def test_writable_must_be_boolean(tmp_path) -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([*REQUIRED, "--backup-dir", str(tmp_path), "--writable", "maybe"])


def test_repository_names(tmp_path, capsys) -> None:
    requests: list[httpx.Request] = []
    code = main(
        [*REQUIRED, "--backup-dir", str(tmp_path), "--repository-names"], http=_server(requests)
    )
    assert code == 0
    assert capsys.readouterr().out.strip() == "articles"


def test_set_writable(tmp_path, capsys) -> None:
    requests: list[httpx.Request] = []
    code = main(
        [*REQUIRED, "--backup-dir", str(tmp_path), "--writable", "false"], http=_server(requests)
    )
    assert code == 0
    assert requests[0].method == "PUT"
    assert requests[0].url.params["userName"] == "admin"
    assert "Repositories writable: false" in capsys.readouterr().out


def test_bad_credentials_exit_code(tmp_path, capsys) -> None:
    args = [
        "--server", "http://kindstore", "--user-name", "admin", "--password", "wrong",
        "--backup-dir", str(tmp_path), "--writable", "true",
    ]
    assert main(args, http=_server([])) == 1
    assert "401" in capsys.readouterr().err


def test_backup_pages_through_repository(tmp_path) -> None:
    requests: list[httpx.Request] = []
    client = KindstoreClient("http://kindstore/", _server(requests))
    assert client.dump("articles", page_size=2) == [{"oId": str(i), "n": i} for i in range(3)]
    assert [r.url.params["page"] for r in requests] == ["1", "2"]


def test_backup_writes_one_file_per_repository(tmp_path) -> None:
    backup_dir = tmp_path / "backup"
    code = main([*REQUIRED, "--backup-dir", str(backup_dir), "--backup", "-v"], http=_server([]))
    assert code == 0
    written = json.loads((backup_dir / "articles.json").read_text(encoding="utf-8"))
    assert [d["oId"] for d in written] == ["0", "1", "2"]
