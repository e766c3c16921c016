"""
Tests unitarios para CubeAlgSyncUseCases.

Se usa FakeRemoteClient (conftest) en lugar de Notion y un SnapshotStore
sobre tmp_path.
"""
from __future__ import annotations

import pytest

from algsync.application.dto.snapshot_dto import (
    AlgorithmSnapshotDTO,
    CaseSnapshotDTO,
    FavoriteEntryDTO,
)
from algsync.application.dto.update_dto import RankUpdateDTO
from algsync.application.interfaces.remote_sync_client import (
    ALG_RELATION_FIELD,
    ALGORITHMS,
    CASES,
    ORIENTATION_RELATION_FIELD,
    RANK_FIELD,
)
from algsync.application.use_cases.sync_use_cases import CubeAlgSyncUseCases
from algsync.domain.entities.records import STALE_RANK, AlgorithmRecord, CaseRecord
from algsync.shared.exceptions.domain import CaseSnapshotMissingException


def _case(name: str, algset: str, *algs: str) -> CaseRecord:
    padded = list(algs) + [""] * (4 - len(algs))
    return CaseRecord(name=name, algset=algset, alg1=padded[0], alg2=padded[1], alg3=padded[2], alg4=padded[3])


class TestSyncIncremental:

    @pytest.mark.asyncio
    async def test_new_alg_is_created_against_empty_snapshot(self, fake_client, store) -> None:
        store.write_cases([CaseSnapshotDTO(name="OLL01", remote_id="case-1")])
        use_cases = CubeAlgSyncUseCases(fake_client, store)

        result = await use_cases.sync_incremental([_case("OLL01", "OLL", "R U R'")], favorites=[])

        assert result.created_algs == 1
        assert result.updated_ranks == 0
        creates = [c for c in fake_client.calls if c[0] == "create"]
        assert creates == [
            ("create", ALGORITHMS, [AlgorithmRecord(alg="R U R'", rank=1, name="OLL01", case_remote_id="case-1")])
        ]
        assert [(s.alg, s.rank, s.name) for s in store.read_algorithms()] == [("R U R'", 1, "OLL01")]
        assert fake_client.relations[(ALG_RELATION_FIELD, "case-1")] == ["page-1"]

    @pytest.mark.asyncio
    async def test_ranks_are_updated_before_creating(self, fake_client, store) -> None:
        algs = [
            AlgorithmSnapshotDTO(alg="old", rank=1, name="OLL01", remote_id="a-old"),
            AlgorithmSnapshotDTO(alg="keep", rank=2, name="OLL01", remote_id="a-keep"),
        ]
        fake_client.algs = list(algs)
        store.write_cases([CaseSnapshotDTO(name="OLL01", remote_id="case-1")])
        store.write_algorithms(algs)
        use_cases = CubeAlgSyncUseCases(fake_client, store)

        result = await use_cases.sync_incremental([_case("OLL01", "OLL", "keep", "new")], favorites=[])

        assert result.updated_ranks == 2
        assert result.created_algs == 1
        mutation_kinds = [(c[0], c[1]) for c in fake_client.mutations()]
        assert mutation_kinds.index(("update", ALGORITHMS)) < mutation_kinds.index(("create", ALGORITHMS))
        rank_updates = next(c[3] for c in fake_client.calls if c[0] == "update" and c[2] == RANK_FIELD)
        assert rank_updates == [
            RankUpdateDTO(rank=STALE_RANK, remote_id="a-old"),
            RankUpdateDTO(rank=1, remote_id="a-keep"),
        ]
        # Relacion caso -> algs en orden de rank, el alg oculto queda al final
        assert fake_client.relations[(ALG_RELATION_FIELD, "case-1")] == ["a-keep", "page-1", "a-old"]

    @pytest.mark.asyncio
    async def test_favorites_are_synced_in_both_directions(self, fake_client, store) -> None:
        algs = [
            AlgorithmSnapshotDTO(alg="A", rank=1, name="OLL01", fave=True, remote_id="a1"),
            AlgorithmSnapshotDTO(alg="B", rank=2, name="OLL01", fave=False, remote_id="a2"),
        ]
        fake_client.algs = list(algs)
        store.write_cases([CaseSnapshotDTO(name="OLL01", remote_id="case-1")])
        store.write_algorithms(algs)
        use_cases = CubeAlgSyncUseCases(fake_client, store)

        result = await use_cases.sync_incremental(
            [_case("OLL01", "OLL", "A", "B")], favorites=[FavoriteEntryDTO(alg="B", algset="OLL")]
        )

        assert result.updated_faves == 2
        assert {(s.remote_id, s.fave) for s in store.read_algorithms()} == {("a1", False), ("a2", True)}

    @pytest.mark.asyncio
    async def test_favorites_default_to_store_file(self, fake_client, store) -> None:
        algs = [AlgorithmSnapshotDTO(alg="A", rank=1, name="OLL01", fave=False, remote_id="a1")]
        fake_client.algs = list(algs)
        store.write_cases([CaseSnapshotDTO(name="OLL01", remote_id="case-1")])
        store.write_algorithms(algs)
        store.fave_path.write_text('[{"alg": "A", "algset": "OLL"}]', encoding="utf-8")
        use_cases = CubeAlgSyncUseCases(fake_client, store)

        result = await use_cases.sync_incremental([_case("OLL01", "OLL", "A")])

        assert result.updated_faves == 1

    @pytest.mark.asyncio
    async def test_second_run_is_a_no_op(self, fake_client, store) -> None:
        store.write_cases(
            [CaseSnapshotDTO(name="OLL01", remote_id="case-1"), CaseSnapshotDTO(name="OLL02", remote_id="case-2")]
        )
        cases = [_case("OLL01", "OLL", "A", "B"), _case("OLL02", "OLL", "C")]
        use_cases = CubeAlgSyncUseCases(fake_client, store)

        await use_cases.sync_incremental(cases, favorites=[])
        second = await use_cases.sync_incremental(cases, favorites=[])

        assert (second.created_algs, second.updated_ranks, second.updated_faves) == (0, 0, 0)

    @pytest.mark.asyncio
    async def test_refresh_first_queries_before_diffing(self, fake_client, store) -> None:
        # El snapshot local quedo viejo: Notion ya tiene el alg creado
        fake_client.algs = [AlgorithmSnapshotDTO(alg="A", rank=1, name="OLL01", remote_id="a1")]
        store.write_cases([CaseSnapshotDTO(name="OLL01", remote_id="case-1")])
        use_cases = CubeAlgSyncUseCases(fake_client, store)

        result = await use_cases.sync_incremental([_case("OLL01", "OLL", "A")], favorites=[], refresh_first=True)

        assert fake_client.calls[0] == ("query_all", ALGORITHMS, ("name", "rank"))
        assert result.created_algs == 0

    @pytest.mark.asyncio
    async def test_missing_case_snapshot_aborts_before_mutations(self, fake_client, store) -> None:
        use_cases = CubeAlgSyncUseCases(fake_client, store)

        with pytest.raises(CaseSnapshotMissingException):
            await use_cases.sync_incremental([_case("OLL01", "OLL", "A")], favorites=[])

        assert fake_client.calls == []

    @pytest.mark.asyncio
    async def test_failed_batch_aborts_and_keeps_old_snapshot(self, fake_client, store) -> None:
        store.write_cases([CaseSnapshotDTO(name="OLL01", remote_id="case-1")])
        fake_client.fail_on_create = RuntimeError("notion down")
        use_cases = CubeAlgSyncUseCases(fake_client, store)

        with pytest.raises(RuntimeError, match="notion down"):
            await use_cases.sync_incremental([_case("OLL01", "OLL", "A")], favorites=[])

        assert not store.alg_path.exists()
        assert not any(c[0] == "query_all" for c in fake_client.calls)


class TestInitialize:

    @pytest.mark.asyncio
    async def test_initialize_creates_cases_orientations_and_algs(self, fake_client, store) -> None:
        cases = [
            _case("F2L01", "F2L", "U R U' R'"),
            _case("F2L01-a", "F2L", "y U' L' U L"),
            _case("F2L02", "F2L", "R U R'", "y L' U' L"),
            _case("PLL01", "PLL", "x R' U R' D2 R U' R' D2 R2"),
        ]
        use_cases = CubeAlgSyncUseCases(fake_client, store)

        result = await use_cases.initialize(cases, orientation_algset="F2L")

        assert (result.created_cases, result.orientation_groups, result.created_algs) == (4, 2, 5)
        ids = {c.name: c.remote_id for c in store.read_cases()}
        assert fake_client.relations[(ORIENTATION_RELATION_FIELD, ids["F2L01"])] == [ids["F2L01"], ids["F2L01-a"]]
        assert fake_client.relations[(ORIENTATION_RELATION_FIELD, ids["F2L02"])] == [ids["F2L02"]]
        assert (ORIENTATION_RELATION_FIELD, ids["PLL01"]) not in fake_client.relations
        algs = store.read_algorithms()
        assert len(algs) == 5
        assert [(a.name, a.rank) for a in algs if a.name == "F2L02"] == [("F2L02", 1), ("F2L02", 2)]

    @pytest.mark.asyncio
    async def test_initialize_skips_loaded_algsets(self, fake_client, store) -> None:
        fake_client.cases = [CaseSnapshotDTO(name="F2L01", remote_id="existing")]
        cases = [_case("F2L01", "F2L", "U R U' R'"), _case("OLL01", "OLL", "R U2 R'")]
        use_cases = CubeAlgSyncUseCases(fake_client, store)

        result = await use_cases.initialize(cases)

        assert result.created_cases == 1
        case_creates = next(c[2] for c in fake_client.calls if c[0] == "create" and c[1] == CASES)
        assert [c.name for c in case_creates] == ["OLL01"]
        alg_creates = next(c[2] for c in fake_client.calls if c[0] == "create" and c[1] == ALGORITHMS)
        assert [a.name for a in alg_creates] == ["OLL01"]
