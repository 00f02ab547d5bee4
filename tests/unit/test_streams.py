"""Unit tests for the asyncio-backed streams."""

from __future__ import annotations

import pytest

from mapper_docstore.exceptions import AdapterStateError, StorageError
from mapper_docstore.ports import CountSink, RecordSink, RecordSource
from mapper_docstore.streams import CountStream
from mapper_docstore.streams import RecordSource as MemorySource
from mapper_docstore.streams import RecordStream


def test_streams_satisfy_protocols() -> None:
    assert isinstance(RecordStream(), RecordSink)
    assert isinstance(CountStream(), CountSink)
    assert isinstance(MemorySource([]), RecordSource)


@pytest.mark.asyncio
async def test_record_stream_write_then_end() -> None:
    out = RecordStream()
    out.write({"a": 1})
    out.write({"a": 2})
    out.end()
    assert out.closed
    assert await out == [{"a": 1}, {"a": 2}]


@pytest.mark.asyncio
async def test_record_stream_async_iteration() -> None:
    out = RecordStream()
    out.write(1)
    out.end()
    seen = [item async for item in out]
    assert seen == [1]


@pytest.mark.asyncio
async def test_record_stream_fail_raises_after_drain() -> None:
    out = RecordStream()
    out.write("first")
    out.fail(StorageError("boom"))
    seen = []
    with pytest.raises(StorageError, match="boom"):
        async for item in out:
            seen.append(item)
    assert seen == ["first"]


def test_stream_rejects_writes_after_end() -> None:
    out = RecordStream()
    out.end()
    with pytest.raises(AdapterStateError):
        out.write(1)


def test_stream_rejects_writes_after_fail() -> None:
    out = CountStream()
    out.fail(StorageError("x"))
    with pytest.raises(AdapterStateError):
        out.end()


@pytest.mark.asyncio
async def test_count_stream_result() -> None:
    out = CountStream()
    out.write(3)
    out.end()
    assert await out.result() == 3


@pytest.mark.asyncio
async def test_count_stream_result_requires_exactly_one_value() -> None:
    out = CountStream()
    out.end()
    with pytest.raises(AdapterStateError, match="expected one count"):
        await out.result()


@pytest.mark.asyncio
async def test_memory_source_returns_copy() -> None:
    records = [{"a": 1}]
    source = MemorySource(records)
    batch = await source.all()
    assert batch == records
    batch.append({"a": 2})
    assert await source.all() == [{"a": 1}]
