"""
Corpus sources for the character language model.

`LanguageModel.train` accepts any iterable of characters. The generators here
produce such streams from strings, plain text files and CSV datasets without the
model ever holding a file handle.

Functions:
    - iter_text_characters: Characters of an in-memory string.
    - iter_file_characters: Characters of a text file, read in chunks.
    - iter_csv_characters: Characters of one CSV column, rows joined by newlines.
    - open_corpus: Picks the right source from the file extension.
"""

import logging
import os

import pandas as pd

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 65536


def iter_text_characters(text):
    yield from text


def iter_file_characters(file_path, encoding="utf-8", chunk_size=DEFAULT_CHUNK_SIZE):
    """
    Streams a text file one character at a time.

    The file is read in chunks of `chunk_size` characters, so arbitrarily large
    corpora can be consumed with bounded memory. Newlines are passed through
    unchanged.

    Args:
        file_path (str): Path to the text file.
        encoding (str): Encoding of the file.
        chunk_size (int): Number of characters read per chunk.

    Returns:
        generator: Single characters in file order.

    Raises:
        FileNotFoundError: If `file_path` does not exist.
    """
    if not os.path.exists(file_path):
        logger.error(f"Corpus file not found: {file_path}")
        raise FileNotFoundError(f"Corpus file not found: {file_path}")

    return _read_file_chunks(file_path, encoding, chunk_size)


def _read_file_chunks(file_path, encoding, chunk_size):
    with open(file_path, "r", encoding=encoding, newline="") as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            yield from chunk


def iter_csv_characters(csv_file_path, column=0, header=None, encoding="utf-8"):
    """
    Streams the text of one CSV column one character at a time.

    Rows are joined with a newline between them, the same way the CSV-backed
    training datasets are flattened into a single corpus.

    Args:
        csv_file_path (str): Path to the CSV file.
        column (int or str): Column position, or column name when `header` is set.
        header (int or None): Row number holding column names, or None when the
            file has no header row.
        encoding (str): Encoding of the file.

    Returns:
        generator: Single characters of the joined column text.

    Raises:
        FileNotFoundError: If `csv_file_path` does not exist.
        KeyError: If `column` names a column that is not in the file.
    """
    if not os.path.exists(csv_file_path):
        logger.error(f"Corpus file not found: {csv_file_path}")
        raise FileNotFoundError(f"Corpus file not found: {csv_file_path}")

    df = pd.read_csv(csv_file_path, encoding=encoding, header=header)

    if isinstance(column, int) and header is not None:
        values = df.iloc[:, column]
    else:
        values = df[column]

    logger.info("Loaded CSV corpus", extra={
        "metrics": {"file_path": csv_file_path, "rows": len(values)}
    })

    return _join_rows(values.astype(str))


def _join_rows(rows):
    first = True
    for row in rows:
        if not first:
            yield "\n"
        first = False
        yield from row


def open_corpus(file_path, encoding="utf-8", csv_column=0, csv_header=None,
                chunk_size=DEFAULT_CHUNK_SIZE):
    """
    Returns a character stream for `file_path`, chosen by its extension.

    Args:
        file_path (str): Path to a `.csv` dataset or a plain text file.
        encoding (str): Encoding of the file.
        csv_column (int or str): Column to read from CSV files.
        csv_header (int or None): Header row of CSV files.
        chunk_size (int): Chunk size for plain text files.

    Returns:
        generator: Characters of the corpus.
    """
    file_ext = os.path.splitext(file_path)[1].lower()
    if file_ext == ".csv":
        return iter_csv_characters(file_path, column=csv_column, header=csv_header,
                                   encoding=encoding)
    return iter_file_characters(file_path, encoding=encoding, chunk_size=chunk_size)
