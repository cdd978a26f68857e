"""서로 독립적인 DB 작업을 각자의 세션에서 병렬 실행하는 유틸리티입니다.

각 작업은 별도 세션/트랜잭션으로 커밋되므로, 일부 작업이 실패해도
이미 끝난 작업은 되돌리지 않는다(부분 완료가 가능한 결과).
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

from sqlalchemy.orm import Session, sessionmaker

from app.config import settings

logger = logging.getLogger(__name__)


@dataclass
class JobResult:
    index: int
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _session_factory(db: Session) -> sessionmaker:
    # 요청 세션과 같은 엔진을 쓰되 작업마다 독립된 연결/트랜잭션을 연다.
    return sessionmaker(autocommit=False, autoflush=False, bind=db.get_bind())


def run_independent(
    db: Session,
    jobs: Sequence[Callable[[Session], Any]],
    max_workers: Optional[int] = None,
) -> List[JobResult]:
    if not jobs:
        return []
    factory = _session_factory(db)

    def _run(index: int, job: Callable[[Session], Any]) -> JobResult:
        session = factory()
        try:
            value = job(session)
            session.commit()
            return JobResult(index=index, value=value)
        except Exception as exc:
            session.rollback()
            logger.warning("[batch] job %s failed: %s", index, exc)
            return JobResult(index=index, error=exc)
        finally:
            session.close()

    workers = max(1, min(len(jobs), max_workers or settings.BATCH_MAX_WORKERS))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(_run, index, job) for index, job in enumerate(jobs)]
        results = [future.result() for future in futures]
    return results
