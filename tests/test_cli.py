import json

import pytest

import gitgist.embedders
from gitgist import cli
from gitgist.models import FunctionInfo, ImportInfo
from gitgist.storage import ChunkStore

@pytest.fixture
def analysis_folder(write_analyses, make_analysis):
    return write_analyses(
        [
            make_analysis("src/server.ts", functions=[FunctionInfo("listen", ("port",), ("createServer",))]),
            make_analysis("src/routes.ts", imports=[ImportInfo("express", ("Router",))], classes=["Routes"]),
            make_analysis("src/empty.ts"),
        ]
    )


def test_chunk_command_writes_json(tmp_path, analysis_folder) -> None:
    output = tmp_path / "chunks.json"

    cli.main(["chunk", str(analysis_folder), "-o", str(output), "--no-combine"])

    chunks = json.loads(output.read_text())
    assert [c["id"] for c in chunks] == [
        "src/server.ts::listen",
        "src/routes.ts::imports",
        "src/routes.ts::Routes",
        "src/empty.ts::summary",
    ]
    assert chunks[0]["name"] == "listen"
    assert chunks[-1]["type"] == "summary"


def test_chunk_command_prints_to_stdout(analysis_folder, capsys) -> None:
    cli.main(["chunk", str(analysis_folder), "--max-size", "500"])

    chunks = json.loads(capsys.readouterr().out)
    assert [c["id"] for c in chunks] == [
        "src/server.ts::listen",
        "src/routes.ts::imports+src/routes.ts::Routes",
        "src/empty.ts::summary",
    ]


def test_summary_command(analysis_folder, capsys) -> None:
    cli.main(["summary", str(analysis_folder)])

    summary = json.loads(capsys.readouterr().out)
    assert summary["totalFiles"] == 3
    assert summary["mostUsedImports"] == {"express": 1}


def test_unknown_source_exits(tmp_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["chunk", str(tmp_path / "nowhere")])

    assert excinfo.value.code == 1


def test_malformed_analysis_exits(tmp_path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps([{"ast_summary": {}}]))

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["chunk", str(bad)])

    assert excinfo.value.code == 1


def test_invalid_options_exit(analysis_folder) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["chunk", str(analysis_folder), "--max-size", "0"])

    assert excinfo.value.code == 1


def test_index_search_and_info(tmp_path, analysis_folder, fake_embedder, monkeypatch, capsys) -> None:
    monkeypatch.setattr(gitgist.embedders, "SentenceTransformerEmbedder", lambda model=None: fake_embedder)
    store_path = tmp_path / "repo.gitgist"

    cli.main(["index", str(analysis_folder), "-o", str(store_path), "--repository", "acme/api", "--no-combine"])

    store = ChunkStore(store_path)
    assert store.count() == 4
    assert store.get_metadata("repository") == "acme/api"
    assert store.get_metadata("embedding_model") == "fake-embedder"

    capsys.readouterr()
    cli.main(["search", str(store_path), "Class: Routes", "--top-k", "1"])
    out = capsys.readouterr().out
    assert "src/routes.ts::Routes (class)" in out

    cli.main(["search", str(store_path), "listen", "--type", "summary"])
    assert "src/empty.ts::summary" in capsys.readouterr().out

    cli.main(["info", str(store_path)])
    out = capsys.readouterr().out
    assert "repository: acme/api" in out
    assert "Files: 3" in out
    assert "Chunks: 4" in out


def test_info_missing_store_exits(tmp_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["info", str(tmp_path / "missing.gitgist")])

    assert excinfo.value.code == 1


def test_search_repository_filter(tmp_path, analysis_folder, write_analyses, make_analysis, fake_embedder, monkeypatch, capsys) -> None:
    monkeypatch.setattr(gitgist.embedders, "SentenceTransformerEmbedder", lambda model=None: fake_embedder)
    web_folder = write_analyses(
        [make_analysis("web/app.tsx", classes=["Routes"])],
        folder="web",
        repository="acme/web",
    )
    store_path = tmp_path / "all.gitgist"

    cli.main(["index", str(analysis_folder), "-o", str(store_path), "--repository", "acme/api", "--no-combine"])
    cli.main(["index", str(web_folder), "-o", str(store_path), "--repository", "acme/web", "--no-combine"])
    assert ChunkStore(store_path).count() == 5

    capsys.readouterr()
    cli.main(["search", str(store_path), "Class: Routes", "--repository", "acme/api"])
    out = capsys.readouterr().out
    assert "src/routes.ts::Routes" in out
    assert "web/app.tsx" not in out

    cli.main(["search", str(store_path), "Class: Routes", "--repository", "acme/web"])
    out = capsys.readouterr().out
    assert "web/app.tsx::Routes (class)" in out
    assert "src/" not in out

    cli.main(["search", str(store_path), "Class: Routes", "--repository", "acme/missing"])
    assert "No results found" in capsys.readouterr().out


def test_index_defaults_to_recorded_repository(tmp_path, analysis_folder, fake_embedder, monkeypatch) -> None:
    monkeypatch.setattr(gitgist.embedders, "SentenceTransformerEmbedder", lambda model=None: fake_embedder)
    store_path = tmp_path / "repo.gitgist"

    cli.main(["index", str(analysis_folder), "-o", str(store_path)])

    store = ChunkStore(store_path)
    assert store.get_metadata("repository") == "https://github.com/acme/api"
    assert len(store.list_files(repository="https://github.com/acme/api")) == 3


def test_index_falls_back_to_source_name(tmp_path, write_analyses, make_analysis, fake_embedder, monkeypatch) -> None:
    monkeypatch.setattr(gitgist.embedders, "SentenceTransformerEmbedder", lambda model=None: fake_embedder)
    folder = write_analyses([make_analysis("a.ts", classes=["A"])], index=False, folder="widgets")
    store_path = tmp_path / "repo.gitgist"

    cli.main(["index", str(folder), "-o", str(store_path)])

    assert ChunkStore(store_path).get_metadata("repository") == "widgets"
