import json
from pathlib import Path

import numpy as np
import pytest

from gitgist.models import (
    ExportInfo,
    ExportType,
    FileAnalysis,
    FunctionInfo,
    ImportInfo,
    SyntaxSummary,
)


def _analysis(
    file: str,
    functions=(),
    imports=(),
    exports=(),
    classes=(),
    variables=(),
) -> FileAnalysis:
    return FileAnalysis(
        file=file,
        ast_summary=SyntaxSummary(
            functions=tuple(functions),
            imports=tuple(imports),
            exports=tuple(exports),
            classes=tuple(classes),
            variables=tuple(variables),
        ),
    )


@pytest.fixture
def make_analysis():
    return _analysis


@pytest.fixture
def rich_analysis() -> FileAnalysis:
    """A file that exercises every category."""
    return _analysis(
        "src/api/client.ts",
        functions=[
            FunctionInfo("fetchUser", ("id",), ("get", "json"), is_async=True, is_exported=True),
            FunctionInfo("retry", ("fn", "attempts"), ("setTimeout",)),
        ],
        imports=[
            ImportInfo("axios", ("axios",), is_default=True),
            ImportInfo("./types", ("User", "Config")),
            ImportInfo("./polyfills"),
        ],
        exports=[
            ExportInfo("fetchUser", ExportType.FUNCTION),
            ExportInfo("ApiClient", ExportType.CLASS, is_default=True),
        ],
        classes=["ApiClient"],
        variables=["BASE_URL", "TIMEOUT"],
    )


@pytest.fixture
def write_analyses(tmp_path: Path):
    """Write analyses in the stored-folder layout and return the folder."""

    def write(analyses, index=True, folder="analysis", repository="https://github.com/acme/api"):
        root = tmp_path / folder
        for analysis in analyses:
            path = Path(analysis.file)
            target = root / path.parent / f"{path.stem}_analysis.json"
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(json.dumps(analysis.to_dict()), encoding="utf-8")
        root.mkdir(parents=True, exist_ok=True)
        (root / "summary.json").write_text(json.dumps({"totalFiles": len(analyses)}))
        if index:
            (root / "index.json").write_text(
                json.dumps({"repository": repository, "files": [a.file for a in analyses]})
            )
        return root

    return write


class FakeEmbedder:
    """Deterministic bag-of-characters embedder for tests."""

    model_name = "fake-embedder"
    dimension = 8

    def __init__(self, fail_on: str | None = None):
        self.fail_on = fail_on
        self.calls: list[list[str]] = []

    def embed(self, texts):
        texts = list(texts)
        self.calls.append(texts)
        if self.fail_on is not None and any(self.fail_on in t for t in texts):
            raise RuntimeError("embedding backend unavailable")
        vectors = np.zeros((len(texts), self.dimension), dtype=np.float32)
        for row, text in enumerate(texts):
            for ch in text.lower():
                vectors[row, ord(ch) % self.dimension] += 1.0
        return vectors


@pytest.fixture
def fake_embedder():
    return FakeEmbedder()


@pytest.fixture
def failing_embedder():
    return FakeEmbedder(fail_on="boom")
