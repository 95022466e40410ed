import pytest

from ingestion import reader, service

from tests.helpers.fakes import FakeConnection, FakePool
from tests.helpers.tsv import make_row, write_tsv

pytestmark = pytest.mark.asyncio


@pytest.fixture
def variant_file(tmp_path):
    rows = [
        make_row(rs="1", type_="single nucleotide variant", significance="Pathogenic"),
        make_row(rs="2", type_="Deletion", significance="Likely pathogenic"),
        make_row(rs="3", type_="Microsatellite", significance="Benign"),
        make_row(rs="4", gene="", significance="Benign"),
        make_row(rs="5", type_="Indel", significance=""),
        make_row(rs="6", type_="Duplication", significance="not provided"),
        make_row(rs="1", type_="Insertion", significance="Benign"),
        make_row(rs="-1", type_="Insertion", significance="Uncertain significance"),
        make_row(rs="", type_="Indel", significance="Likely benign"),
    ]
    return write_tsv(tmp_path / "variant_summary.txt", rows)


async def test_load_variants_counts_every_outcome(variant_file):
    pool = FakePool()

    stats = await service.load_variants(variant_file, pool=pool)

    assert stats == service.IngestStats(rows_seen=9, inserted=4, duplicates=1, skipped=4, failed=0)
    stored = [(row[1], row[3], row[4]) for row in pool.connection.rows]
    assert stored == [
        ("1", "SNP", "Pathogenic"),
        ("2", "Deletion", "Likely pathogenic"),
        ("-1", "Insertion", "Uncertain significance"),
        (None, "Indel", "Likely benign"),
    ]


async def test_first_write_wins_on_duplicate_external_id(variant_file):
    pool = FakePool()

    await service.load_variants(variant_file, pool=pool)

    (first,) = [row for row in pool.connection.rows if row[1] == "1"]
    assert first[3] == "SNP"


async def test_reingesting_is_idempotent(tmp_path):
    path = write_tsv(tmp_path / "variant_summary.txt", [make_row(rs=str(n)) for n in range(1, 21)])
    pool = FakePool()

    first = await service.load_variants(path, pool=pool)
    second = await service.load_variants(path, pool=pool)

    assert first.inserted == 20
    assert second.inserted == 0
    assert second.duplicates == 20
    assert len(pool.connection.rows) == 20


async def test_rows_missing_gene_or_significance_never_reach_storage(tmp_path):
    rows = [
        make_row(rs=str(n), gene="" if n % 2 else "BRCA1", significance="" if n % 3 == 0 else "Benign")
        for n in range(30)
    ]
    path = write_tsv(tmp_path / "variant_summary.txt", rows)
    pool = FakePool()

    stats = await service.load_variants(path, pool=pool)

    assert all(row[0] == "BRCA1" and row[4] == "Benign" for row in pool.connection.rows)
    assert stats.inserted == len([n for n in range(30) if n % 2 == 0 and n % 3 != 0])
    assert stats.rows_seen == 30


async def test_failed_insert_does_not_stop_the_run(tmp_path):
    path = write_tsv(tmp_path / "variant_summary.txt", [make_row(rs=str(n)) for n in range(1, 6)])
    pool = FakePool(connection=FakeConnection(fail_on={"2", "4"}))

    stats = await service.load_variants(path, pool=pool)

    assert stats.failed == 2
    assert stats.inserted == 3
    assert [row[1] for row in pool.connection.rows] == ["1", "3", "5"]


async def test_one_insert_in_flight_and_next_row_waits(tmp_path, monkeypatch):
    path = write_tsv(
        tmp_path / "variant_summary.txt",
        [make_row(rs=str(n), name=f"pos{n}") for n in range(1, 4)],
    )
    connection = FakeConnection()
    real_iter_rows = reader.iter_rows

    def tracking_iter_rows(p):
        for row in real_iter_rows(p):
            connection.events.append(f"read {row['Name']}")
            yield row

    monkeypatch.setattr(reader, "iter_rows", tracking_iter_rows)

    await service.load_variants(path, pool=FakePool(connection=connection))

    assert connection.max_in_flight == 1
    assert connection.events == [
        "read pos1",
        "insert-start pos1",
        "insert-end pos1",
        "read pos2",
        "insert-start pos2",
        "insert-end pos2",
        "read pos3",
        "insert-start pos3",
        "insert-end pos3",
    ]


async def test_connection_released_when_file_is_bad(tmp_path):
    path = tmp_path / "variant_summary.txt"
    path.write_text("just\tsome\tcolumns\n", encoding="utf-8")
    pool = FakePool()

    with pytest.raises(reader.IngestionError):
        await service.load_variants(path, pool=pool)

    assert pool.acquired == pool.released == 1


async def test_missing_file_is_a_terminal_failure(tmp_path):
    pool = FakePool()

    with pytest.raises(FileNotFoundError):
        await service.load_variants(tmp_path / "nope.txt", pool=pool)

    assert pool.released == 1


async def test_run_closes_pool_on_failure(tmp_path, monkeypatch):
    pool = FakePool()
    closed = []

    async def fake_init_pool():
        return pool

    async def fake_close_pool():
        closed.append(True)

    monkeypatch.setattr(service.db, "init_pool", fake_init_pool)
    monkeypatch.setattr(service.db, "close_pool", fake_close_pool)

    with pytest.raises(FileNotFoundError):
        await service.run(tmp_path / "missing.txt")

    assert closed == [True]


async def test_reingesting_minus_one_external_ids_does_not_grow_storage(tmp_path):
    rows = [
        make_row(rs="-1", name="pos1", type_="Deletion"),
        make_row(rs="-1", name="pos2", type_="Insertion"),
    ]
    path = write_tsv(tmp_path / "variant_summary.txt", rows)
    pool = FakePool()

    first = await service.load_variants(path, pool=pool)
    second = await service.load_variants(path, pool=pool)

    assert (first.inserted, first.duplicates) == (1, 1)
    assert (second.inserted, second.duplicates) == (0, 2)
    assert [(row[1], row[2]) for row in pool.connection.rows] == [("-1", "pos1")]
