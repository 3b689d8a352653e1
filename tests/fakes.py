"""
In-memory stand-ins for the Prometheus and Alertmanager collaborators.
"""

from __future__ import annotations

import asyncio

from silence_manager.api.models import SilenceRecord
from silence_manager.core.protocols import LabelValuesSource, SilenceSubmitter


class FakeValuesSource(LabelValuesSource):
    """Label values served from a dict; labels in ``errors`` raise instead."""

    def __init__(
        self,
        values: dict[str, list[str]] | None = None,
        errors: dict[str, Exception] | None = None,
    ) -> None:
        self.values = dict(values or {})
        self.errors = dict(errors or {})
        self.calls: list[str] = []

    async def fetch_label_values(self, label: str) -> list[str]:
        self.calls.append(label)
        if label in self.errors:
            raise self.errors[label]
        return list(self.values.get(label, []))


class GatedValuesSource(LabelValuesSource):
    """Every fetch waits on a future the test resolves, in any order."""

    def __init__(self) -> None:
        self.pending: list[tuple[str, asyncio.Future]] = []

    async def fetch_label_values(self, label: str) -> list[str]:
        future: asyncio.Future = asyncio.get_running_loop().create_future()
        self.pending.append((label, future))
        return await future

    async def wait_for(self, count: int) -> None:
        """Yield to the loop until ``count`` fetches are outstanding."""
        while len(self.pending) < count:
            await asyncio.sleep(0)


class FakeSubmitter(SilenceSubmitter):
    """Records submitted silences and returns a fixed ID or raises."""

    def __init__(self, silence_id: str = "d3b0c7a1-silence", error: Exception | None = None) -> None:
        self.silence_id = silence_id
        self.error = error
        self.records: list[SilenceRecord] = []

    async def submit_silence(self, record: SilenceRecord) -> str:
        self.records.append(record)
        if self.error is not None:
            raise self.error
        return self.silence_id
