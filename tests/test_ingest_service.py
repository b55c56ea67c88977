import requests

from repositories.robot_data_repo import InsertSummary, RobotDataRepository
from services.fetcher import FetchResult, FetchStatus
from services.ingest_service import IngestService


class StubFetcher:
    def __init__(self, *results):
        self.results = list(results)

    def fetch(self):
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class SpyRepository:
    def __init__(self, error=None):
        self.batches = []
        self.error = error

    def insert_many(self, items):
        self.batches.append(list(items))
        if self.error is not None:
            raise self.error
        return InsertSummary(attempted=len(items), inserted=len(items))


def test_empty_fetch_skips_writer(caplog):
    repo = SpyRepository()
    result = IngestService(StubFetcher(FetchResult.empty()), repo).run_tick()

    assert repo.batches == []
    assert result.summary is None
    assert result.failed is False
    assert "No data received from API." in caplog.text


def test_records_are_handed_to_writer():
    repo = SpyRepository()
    records = [{"tag": "a"}, {"tag": "b"}]

    result = IngestService(StubFetcher(FetchResult.ok(records)), repo).run_tick()

    assert repo.batches == [records]
    assert result.summary.inserted == 2


def test_failed_fetch_is_distinct_from_empty(caplog):
    repo = SpyRepository()
    error = requests.Timeout("read timed out")

    result = IngestService(StubFetcher(FetchResult.failed(error)), repo).run_tick()

    assert repo.batches == []
    assert result.failed is True
    assert result.fetch.error is error
    assert "No data received" not in caplog.text
    assert "Fetch failed" in caplog.text


def test_unexpected_errors_do_not_escape(caplog):
    service = IngestService(StubFetcher(RuntimeError("boom")), SpyRepository())
    assert service.run_tick().failed is True

    repo = SpyRepository(error=RuntimeError("pool closed"))
    result = IngestService(StubFetcher(FetchResult.ok([{"tag": "a"}])), repo).run_tick()
    assert result.summary is None
    assert "Unexpected error while inserting" in caplog.text


def test_loop_keeps_going_after_failure(fake_db, sample_item):
    fetcher = StubFetcher(
        FetchResult.failed(ValueError("malformed JSON")),
        FetchResult.ok([sample_item]),
    )
    service = IngestService(fetcher, RobotDataRepository(fake_db))

    first = service.run_tick()
    second = service.run_tick()

    assert first.fetch.status is FetchStatus.FAILED
    assert second.summary.inserted == 1
    assert len(fake_db.conn.rows) == 1
