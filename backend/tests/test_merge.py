"""
Tests for the candidate merge engine.
"""

import pytest

from medscan.application.pipeline.merge import CandidateMergeEngine, display_name
from medscan.config.settings import MergeConfig
from medscan.domain.entities.candidate import CandidateOrigin, MedicineCandidate
from medscan.domain.value_objects.bounding_box import BoundingBox


def ai(name, box=None):
    return MedicineCandidate(name=name, bounding_box=box)


@pytest.fixture
def engine():
    return CandidateMergeEngine()


def test_case_and_whitespace_variants_merge_into_one(engine):
    detections = engine.merge([ai("Paracetamol"), ai("paracetamol "), ai("PARACETAMOL")])

    assert detections.names == ["Paracetamol"]


def test_short_names_are_skipped(engine):
    detections = engine.merge([ai("ab"), ai("Amoxicillin")])

    assert detections.names == ["Amoxicillin"]


def test_three_character_name_is_kept(engine):
    assert engine.merge([ai("abc")]).names == ["Abc"]


def test_padding_does_not_count_towards_length(engine):
    assert engine.merge([ai("  ab  ")]).is_empty


def test_display_name_capitalizes_first_letter():
    assert display_name("  dolo 650 ") == "Dolo 650"
    assert display_name("augmentin DUO") == "Augmentin duo"
    assert display_name("PARACETAMOL") == "Paracetamol"


def test_shouted_name_is_displayed_capitalized(engine):
    detections = engine.merge([ai("PARACETAMOL"), ai("paracetamol")])

    assert detections.names == ["Paracetamol"]


def test_case_variants_collapse_to_one(engine):
    detections = engine.merge([ai("dolo 650"), ai("DOLO 650")])

    assert detections.names == ["Dolo 650"]


def test_box_center_becomes_position(engine):
    detections = engine.merge([ai("Dolo 650", BoundingBox(40, 20, 10, 10))])

    position = detections[0].position
    assert (position.x, position.y) == (45.0, 25.0)


def test_box_outside_image_is_clamped(engine):
    detections = engine.merge([ai("Dolo 650", BoundingBox(95, -30, 20, 10))])

    position = detections[0].position
    assert (position.x, position.y) == (100.0, 0.0)


def test_scatter_positions_follow_candidate_index(engine):
    detections = engine.merge([ai("Aspirin"), ai("Ibuprofen"), ai("Naproxen")])

    positions = [(d.position.x, d.position.y) for d in detections]
    assert positions == [(30.0, 30.0), (45.0, 40.0), (60.0, 50.0)]


def test_skipped_candidates_still_advance_scatter_index(engine):
    detections = engine.merge([ai("xy"), ai("Aspirin")])

    assert (detections[0].position.x, detections[0].position.y) == (45.0, 40.0)


def test_scatter_wraps_inside_band(engine):
    for i in range(20):
        position = engine.scatter_position(i)
        assert 30.0 <= position.x < 70.0
        assert 30.0 <= position.y < 70.0


def test_origin_default_confidences(engine):
    detections = engine.merge(
        [ai("Dolo 650")],
        [MedicineCandidate("ibuprofen", origin=CandidateOrigin.OCR)],
        [MedicineCandidate("cetirizine", origin=CandidateOrigin.EXTRACT)],
    )

    assert [d.confidence for d in detections] == [0.95, 0.80, 0.85]


def test_source_confidence_overrides_default(engine):
    candidate = MedicineCandidate("ibuprofen", source_confidence=0.42, origin=CandidateOrigin.OCR)

    assert engine.merge([candidate])[0].confidence == 0.42


def test_lower_priority_list_cannot_duplicate_earlier_name(engine):
    detections = engine.merge(
        [ai("Ibuprofen 400")],
        [MedicineCandidate("ibuprofen 400", origin=CandidateOrigin.OCR)],
    )

    assert len(detections) == 1
    assert detections[0].confidence == 0.95


def test_ids_are_unique_and_prefixed_with_origin(engine):
    detections = engine.merge(
        [ai("Aspirin"), ai("Naproxen")],
        [MedicineCandidate("ibuprofen", origin=CandidateOrigin.OCR)],
    )

    ids = [d.id for d in detections]
    assert len(set(ids)) == 3
    assert ids[0].startswith("ai-")
    assert ids[2].startswith("ocr-")


def test_merging_twice_gives_equal_content(engine):
    candidates = [ai("Dolo 650", BoundingBox(10, 10, 20, 5)), ai("Aspirin"), ai("aspirin")]

    first = engine.merge(candidates)
    second = engine.merge(candidates)

    assert first.contents() == second.contents()
    assert [d.id for d in first] != [d.id for d in second]


def test_invariants_hold_for_mixed_input(engine):
    candidates = [
        ai("Paracetamol"),
        ai("pa"),
        ai(" Paracetamol"),
        ai("Crocin", BoundingBox(-50, 150, 10, 10)),
        ai("Augmentin 625", BoundingBox(0, 0, 100, 100)),
        ai("x"),
    ]
    eligible = [c for c in candidates if len(c.name.strip()) > 2]

    detections = engine.merge(candidates)

    assert len(detections) <= len(eligible)
    keys = [d.name.strip().lower() for d in detections]
    assert len(keys) == len(set(keys))
    for detection in detections:
        assert 0.0 <= detection.position.x <= 100.0
        assert 0.0 <= detection.position.y <= 100.0
        assert 0.0 <= detection.confidence <= 1.0
        assert detection.name == detection.name.strip()


def test_empty_input_gives_empty_set(engine):
    assert engine.merge().is_empty
    assert engine.merge([]).is_empty


def test_custom_min_name_length():
    engine = CandidateMergeEngine(MergeConfig(min_name_length=5))

    assert engine.merge([ai("Dolo"), ai("Crocin")]).names == ["Crocin"]
