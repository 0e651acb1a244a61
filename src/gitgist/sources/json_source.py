"""Source for analyses held in a single JSON document."""

from pathlib import Path
from typing import Iterator

from gitgist.models import AnalysisFormatError, FileAnalysis
from gitgist.sources.layout import decode_json


class JsonFileSource:
    """Source for one JSON file: a list of analyses or an analysis result.

    An analysis result is an object with an ``analyses`` list, as returned
    by the repository analysis endpoint.
    """

    source_type = "json"

    def can_handle(self, source: Path) -> bool:
        return source.suffix.lower() == ".json" and source.is_file()

    def load(self, source: Path) -> Iterator[FileAnalysis]:
        data = decode_json(source.read_bytes(), source.name)
        if isinstance(data, dict) and "analyses" in data:
            data = data["analyses"]
        elif isinstance(data, dict) and "file" in data:
            data = [data]
        if not isinstance(data, list):
            raise AnalysisFormatError(f"{source.name}: expected a list of file analyses")

        for i, item in enumerate(data):
            try:
                yield FileAnalysis.from_dict(item)
            except AnalysisFormatError as e:
                raise AnalysisFormatError(f"{source.name}[{i}]: {e}") from e
