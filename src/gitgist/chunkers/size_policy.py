"""Merge and split passes that keep chunks inside the configured size ceiling."""

from dataclasses import replace
from typing import Sequence

from gitgist.models import Chunk, ChunkOptions

MERGE_SEPARATOR = "\n\n"


def _check_max_size(max_size: int) -> None:
    if max_size <= 0:
        raise ValueError("max_size must be greater than zero")


def merge_small_chunks(chunks: Sequence[Chunk], max_size: int) -> list[Chunk]:
    """Merge adjacent chunks while the joined text fits in max_size.

    The merged chunk keeps the earlier chunk's type and file, drops the
    name, and joins the ids with "+". A chunk that is already over
    max_size is passed through untouched.

    Args:
        chunks: Chunks in emission order
        max_size: Maximum characters in a merged chunk

    Returns:
        New list of chunks in the same relative order
    """
    _check_max_size(max_size)
    if len(chunks) <= 1:
        return list(chunks)

    result: list[Chunk] = []
    current = chunks[0]

    for nxt in chunks[1:]:
        combined = current.text + MERGE_SEPARATOR + nxt.text
        if len(combined) <= max_size:
            current = Chunk(
                id=f"{current.id}+{nxt.id}",
                text=combined,
                type=current.type,
                file=current.file,
            )
        else:
            result.append(current)
            current = nxt

    result.append(current)
    return result


def split_large_chunks(chunks: Sequence[Chunk], max_size: int) -> list[Chunk]:
    """Split chunks longer than max_size on line boundaries.

    Lines are accumulated greedily; each part becomes a copy of the
    original chunk with id "<id>#<n>". A single line longer than
    max_size is not subdivided and becomes an oversized part of its own.

    Args:
        chunks: Chunks in emission order
        max_size: Maximum characters per part

    Returns:
        New list of chunks in the same relative order
    """
    _check_max_size(max_size)
    result: list[Chunk] = []

    for chunk in chunks:
        if len(chunk.text) <= max_size:
            result.append(chunk)
            continue

        part = 1
        current = ""
        for line in chunk.text.split("\n"):
            candidate = f"{current}\n{line}" if current else line
            if len(candidate) > max_size and current:
                result.append(replace(chunk, id=f"{chunk.id}#{part}", text=current))
                part += 1
                current = line
            else:
                current = candidate

        if current:
            result.append(replace(chunk, id=f"{chunk.id}#{part}", text=current))

    return result


def apply_size_policy(chunks: Sequence[Chunk], options: ChunkOptions) -> list[Chunk]:
    """Run the merge pass then the split pass, as enabled by options."""
    result = list(chunks)
    if options.combine:
        result = merge_small_chunks(result, options.max_size)
    if options.split:
        result = split_large_chunks(result, options.max_size)
    return result
