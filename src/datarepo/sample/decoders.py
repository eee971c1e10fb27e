from typing import Iterable, Iterator, Optional
import codecs
import csv
import itertools


def _iter_text_lines(chunks: Iterable[bytes], encoding: str) -> Iterator[str]:
    decoder = codecs.getincrementaldecoder(encoding)()
    buffer = ""
    for chunk in chunks:
        buffer += decoder.decode(chunk)
        while True:
            idx = buffer.find("\n")
            if idx == -1:
                break
            line, buffer = buffer[:idx], buffer[idx + 1:]
            if line.endswith("\r"):
                line = line[:-1]
            yield line
    buffer += decoder.decode(b"", final=True)
    if buffer:
        if buffer.endswith("\r"):
            buffer = buffer[:-1]
        yield buffer


def column_names(count: int) -> list[str]:
    return [f"column_{i}" for i in range(count)]


class CsvDecoder:
    """Decode CSV bytes into (columns, rows) with or without a header row."""

    def __init__(self, *, delimiter: str = ",", header: bool = True, encoding: str = "utf-8"):
        self.delimiter = delimiter
        self.header = header
        self.encoding = encoding

    def decode(
        self, chunks: Iterable[bytes], *, limit: Optional[int] = None
    ) -> tuple[list[str], list[list[str]]]:
        reader = csv.reader(_iter_text_lines(chunks, self.encoding), delimiter=self.delimiter)
        rows = (row for row in reader if row)
        columns: list[str] = []
        if self.header:
            first = next(rows, None)
            if first is None:
                return [], []
            columns = [name.strip() for name in first]
        sampled = [list(row) for row in itertools.islice(rows, limit)]
        if not self.header:
            width = max((len(row) for row in sampled), default=0)
            columns = column_names(width)
        return columns, sampled
