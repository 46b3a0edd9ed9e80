import pytest

from museumgen import generate
from museumgen.broadcast import CONTENT, MODULE, RecordingBroadcaster
from museumgen.config import GenerationParams
from museumgen.errors import GenerationConfigError
from museumgen.library import Category, ModuleTemplate, TemplateLibrary, default_content, default_library

SEEDS = [0, 1, 7, 42, "museum", 2024]


@pytest.fixture(scope="module")
def museum():
    return default_library()


@pytest.fixture(scope="module")
def pieces():
    return default_content()


@pytest.mark.parametrize("seed", SEEDS)
def test_confirmed_modules_never_share_cells(museum, pieces, seed):
    result = generate(museum, GenerationParams(room_count=14), seed=seed, content=pieces)
    seen = set()
    for module in result.modules:
        assert module.cells, f"module {module.id} claimed no cells"
        assert not (module.cells & seen)
        seen |= module.cells
    assert seen == set(result.occupied)


@pytest.mark.parametrize("seed", SEEDS)
def test_pairings_are_coincident_and_antiparallel(museum, seed):
    result = generate(museum, GenerationParams(room_count=12), seed=seed)
    sockets = {s.id: s for s in result.sockets}
    assert result.pairs
    for a, b in result.pairs:
        sa, sb = sockets[a], sockets[b]
        assert sa.module_id != sb.module_id
        assert sa.facing.dot(sb.facing) <= -0.95
        assert sa.position.distance_to(sb.position) < 1e-6


@pytest.mark.parametrize("seed", SEEDS)
def test_single_spawn_at_origin_and_room_budget_respected(museum, seed):
    params = GenerationParams(room_count=10)
    result = generate(museum, params, seed=seed)
    spawns = [m for m in result.modules if m.template.category is Category.SPAWN]
    assert len(spawns) == 1
    first = result.modules[0]
    assert first is spawns[0]
    assert (first.position.x, first.position.z, first.rotation) == (0, 0, 0)
    assert result.records[0].kind == MODULE
    assert result.records[0].position == (0.0, 0.0, 0.0)
    assert 1 <= result.rooms_placed <= params.room_count


def test_same_seed_same_records(museum, pieces):
    params = GenerationParams(room_count=15)
    a = generate(museum, params, seed="gallery-night", content=pieces)
    b = generate(museum, params, seed="gallery-night", content=pieces)
    assert a.records == b.records
    assert a.signature() == b.signature()
    assert a.seed == b.seed


def test_different_seeds_diverge(museum, pieces):
    params = GenerationParams(room_count=15)
    signatures = {generate(museum, params, seed=s, content=pieces).signature() for s in range(6)}
    assert len(signatures) > 1


def test_single_room_is_spawn_only(museum, pieces):
    result = generate(museum, GenerationParams(room_count=1), seed=3)
    assert result.rooms_placed == 1
    assert result.branches == []
    assert result.pairs == []
    assert result.capping.capped == 0
    assert result.open_connectors == len(result.modules[0].socket_ids)


def test_four_sockets_nine_rooms_fills_every_branch(small_library):
    result = generate(small_library, GenerationParams(room_count=9), seed=5)

    assert result.rooms_placed == 9
    assert [b.target for b in result.branches] == [2, 2, 2, 2]
    assert all(b.placed == 2 for b in result.branches)
    assert sorted(result.spawn_usage.values()) == [2, 2, 2, 2]
    assert result.open_connectors == 0
    # each branch ends in a capped dead end
    endings = [m for m in result.modules if m.template.category is Category.ENDING]
    assert len(endings) == 4


def test_forced_endings_without_ending_templates(cross_spawn, corridor):
    library = TemplateLibrary([cross_spawn, corridor])
    result = generate(library, GenerationParams(room_count=9, force_ending_rooms=True), seed=5)
    assert result.rooms_placed == 9
    assert all(m.template.category is not Category.ENDING for m in result.modules)
    assert result.capping.attempted == 0


def test_spawn_only_library_stops_quietly(cross_spawn):
    result = generate(TemplateLibrary([cross_spawn]), GenerationParams(room_count=5), seed=1)
    assert result.rooms_placed == 1
    assert result.open_connectors == 4


@pytest.mark.parametrize(
    "library,spawn_id",
    [
        (TemplateLibrary(), None),
        (TemplateLibrary([ModuleTemplate(id="hall", width=3, depth=3, category=Category.NORMAL)]), None),
        (TemplateLibrary([ModuleTemplate(id="hall", width=3, depth=3, category=Category.NORMAL)]), "hall"),
        (TemplateLibrary([ModuleTemplate(id="lobby", width=3, depth=3, category=Category.SPAWN)]), None),
        (TemplateLibrary([ModuleTemplate(id="lobby", width=3, depth=3, category=Category.SPAWN)]), "atrium"),
    ],
)
def test_fatal_configuration_confirms_nothing(library, spawn_id):
    recorder = RecordingBroadcaster()
    with pytest.raises(GenerationConfigError):
        generate(library, GenerationParams(spawn_template=spawn_id), seed=1, broadcaster=recorder)
    assert recorder.records == []


def test_external_broadcaster_sees_every_record_in_order(museum, pieces):
    recorder = RecordingBroadcaster()
    result = generate(museum, GenerationParams(room_count=12), seed=11, content=pieces, broadcaster=recorder)
    assert tuple(recorder.records) == result.records
    kinds = [r.kind for r in result.records]
    # content is only placed once the layout is final
    assert kinds == sorted(kinds, key=lambda k: k == CONTENT)
    assert sum(1 for k in kinds if k == MODULE) == result.rooms_placed
    assert sum(1 for k in kinds if k == CONTENT) == len(result.contents) == result.gallery.filled


def test_records_use_cardinal_rotations(museum, pieces):
    result = generate(museum, GenerationParams(room_count=20), seed=8, content=pieces)
    assert {r.rotation for r in result.records} <= {0, 90, 180, 270}


def test_uncapped_budget_never_skips(museum):
    params = GenerationParams(room_count=8, cap_within_room_budget=False)
    result = generate(museum, params, seed=13)
    assert result.capping.skipped_over_budget == 0


def test_result_summary_is_json_ready(museum, pieces):
    result = generate(museum, GenerationParams(room_count=6), seed=21, content=pieces)
    summary = result.to_dict()
    assert summary["signature"] == result.signature()
    assert summary["rooms_placed"] == result.rooms_placed
    assert summary["connectors_left_open"] == result.open_connectors
    assert len(summary["records"]) == len(result.records)
    assert set(summary["gallery"]) == {"groups", "filled", "empty"}
