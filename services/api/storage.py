"""Analysis stores.

Ids are sequential integers handed out by a single atomic step per store
(a lock-guarded counter in memory, INCR in Redis), so concurrent requests
never share an id.
"""

import itertools
import json
import logging
import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional, Protocol

import redis

from core.review_engine.models import AnalysisResult, CodeAnalysis

logger = logging.getLogger(__name__)

ID_KEY = "analysis:next_id"
RECENT_KEY = "analyses:recent"
MAX_INDEX = 2**63 - 1


def _record_key(analysis_id: int) -> str:
    return f"analysis:{analysis_id}"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class AnalysisStore(Protocol):
    backend: str

    def create(self, code: str, language: str, result: AnalysisResult) -> CodeAnalysis:
        ...

    def get_by_id(self, analysis_id: int) -> Optional[CodeAnalysis]:
        ...

    def list_recent(self, limit: int = 10) -> List[CodeAnalysis]:
        ...


class MemoryAnalysisStore:
    """Process-lifetime store; everything is lost on restart."""

    backend = "memory"

    def __init__(self) -> None:
        self._analyses: Dict[int, CodeAnalysis] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create(self, code: str, language: str, result: AnalysisResult) -> CodeAnalysis:
        with self._lock:
            analysis = CodeAnalysis(
                id=next(self._ids),
                code=code,
                language=language,
                quality_score=result.quality_score,
                issues=list(result.issues),
                optimized_code=result.optimized_code,
                created_at=_now(),
            )
            self._analyses[analysis.id] = analysis
        return analysis

    def get_by_id(self, analysis_id: int) -> Optional[CodeAnalysis]:
        return self._analyses.get(analysis_id)

    def list_recent(self, limit: int = 10) -> List[CodeAnalysis]:
        with self._lock:
            analyses = list(self._analyses.values())
        analyses.sort(key=lambda a: (a.created_at, a.id), reverse=True)
        return analyses[:limit]

    def __len__(self) -> int:
        return len(self._analyses)


class RedisAnalysisStore:
    """Keeps records as JSON strings; the recency index is a sorted set by id."""

    backend = "redis"

    def __init__(self, client: "redis.Redis") -> None:
        self.r = client

    @classmethod
    def from_url(cls, url: str) -> "RedisAnalysisStore":
        return cls(redis.Redis.from_url(url, decode_responses=True))

    def create(self, code: str, language: str, result: AnalysisResult) -> CodeAnalysis:
        analysis_id = int(self.r.incr(ID_KEY))
        analysis = CodeAnalysis(
            id=analysis_id,
            code=code,
            language=language,
            quality_score=result.quality_score,
            issues=list(result.issues),
            optimized_code=result.optimized_code,
            created_at=_now(),
        )
        with self.r.pipeline(transaction=True) as pipe:
            pipe.set(_record_key(analysis_id), analysis.model_dump_json(by_alias=True))
            pipe.zadd(RECENT_KEY, {str(analysis_id): analysis_id})
            pipe.execute()
        return analysis

    def get_by_id(self, analysis_id: int) -> Optional[CodeAnalysis]:
        raw = self.r.get(_record_key(analysis_id))
        if raw is None:
            return None
        return CodeAnalysis.model_validate(json.loads(raw))

    def list_recent(self, limit: int = 10) -> List[CodeAnalysis]:
        if limit == 0:
            return []
        # limit - 1 keeps python slice semantics for negative limits;
        # redis only accepts signed 64-bit indexes
        end = max(min(limit - 1, MAX_INDEX), -MAX_INDEX - 1)
        ids = self.r.zrevrange(RECENT_KEY, 0, end)
        out: List[CodeAnalysis] = []
        for raw_id in ids:
            analysis = self.get_by_id(int(raw_id))
            if analysis is not None:
                out.append(analysis)
        return out


def build_store(backend: str, redis_url: Optional[str] = None) -> AnalysisStore:
    if backend == "redis":
        if not redis_url:
            raise ValueError("REDIS_URL is required for the redis storage backend")
        logger.info("Storage: using redis at %s", redis_url)
        return RedisAnalysisStore.from_url(redis_url)
    if backend != "memory":
        raise ValueError(f"Unknown storage backend: {backend}")
    logger.info("Storage: using in-memory store")
    return MemoryAnalysisStore()
