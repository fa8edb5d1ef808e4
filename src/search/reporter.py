from __future__ import annotations

import sys
from typing import Sequence, TextIO

from src.web.extractor import ExtractedRecord


class ResultReporter:
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def report(self, records: Sequence[ExtractedRecord], query: str) -> None:
        # Resolve late so pytest's capsys sees the output.
        stream = self._stream or sys.stdout
        print(f"\nFound {len(records)} links for query '{query}':", file=stream)
        for index, record in enumerate(records, start=1):
            print(f"{index}. Title: {record.text}", file=stream)
            print(f"   URL: {record.url}", file=stream)
