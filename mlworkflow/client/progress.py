from typing import Callable, Iterator

ProgressCallback = Callable[[int], None]


def percent(sent: int, total: int) -> int:
    if total <= 0:
        return 100
    return int(sent * 100 / total + 0.5)


def iter_with_progress(payload: bytes, chunk_size: int, on_progress: ProgressCallback) -> Iterator[bytes]:
    """
    Yield ``payload`` in chunks, reporting the integer percentage sent after
    each chunk has been handed to the consumer.
    """
    total = len(payload)
    if total == 0:
        on_progress(100)
        return
    sent = 0
    for start in range(0, total, chunk_size):
        chunk = payload[start:start + chunk_size]
        yield chunk
        sent += len(chunk)
        on_progress(percent(sent, total))
