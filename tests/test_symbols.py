import pytest

from morphic_trapezoids import VECTOR_MAP, Interval, MORPHISM, SequenceConfig, SequenceTooShortError, SymbolSequence
from morphic_trapezoids.symbols import generate_symbols, merge_new_windows


@pytest.fixture(scope="module")
def sequence():
    return SymbolSequence(1000)


def test_generation_expands_its_own_prefix():
    assert generate_symbols(14) == [0, 4, 9, 0, 8, 9, 0, 4, 0, 7, 4, 11, 7, 4]


def test_generation_is_prefix_stable():
    assert SymbolSequence(500).symbols(50) == SymbolSequence(50).symbols()


def test_generation_truncates_last_image():
    assert len(generate_symbols(10)) == 10
    assert generate_symbols(0) == []


def test_every_image_starts_with_its_symbol():
    for symbol, image in enumerate(MORPHISM):
        assert image[0] == symbol
        assert len(image) == 7


def test_extend_is_idempotent():
    seq = SymbolSequence(20)
    seq.extend(10)
    assert len(seq) == 20
    seq.extend(30)
    assert len(seq) == 30
    assert seq.symbols(20) == SymbolSequence(20).symbols()


def test_letters():
    assert SymbolSequence(14).letters() == "aejaijaeahelhe"


def test_negative_length_is_rejected():
    with pytest.raises(ValueError):
        SymbolSequence(-1)


@pytest.mark.parametrize(
    "start, length, expected",
    [
        (3, 1, 0),
        (6, 2, 0),
        (1, 3, 1),
        (8, 1, 0),
    ],
)
def test_earliest_subword_match(sequence, start, length, expected):
    assert sequence.earliest_subword_match(start, length) == expected


def test_earliest_subword_match_validates_arguments(sequence):
    with pytest.raises(ValueError):
        sequence.earliest_subword_match(0, 0)
    with pytest.raises(ValueError):
        sequence.earliest_subword_match(-1, 2)


@pytest.mark.parametrize(
    "length, expected",
    [
        (1, 214),
        (2, 557),
        (3, 3904),
        (4, 3904),
        (5, 3904),
        (6, 3904),
        (7, 3904),
        (8, 3904),
        (9, 27334),
        (10, 27334),
    ],
)
def test_index_of_last_new_subword(length, expected):
    assert SymbolSequence(1000).index_of_last_new_subword(length) == expected


def test_index_of_last_new_subword_reuses_shorter_answers():
    seq = SymbolSequence(1000)
    assert seq.index_of_last_new_subword(9) == 27334
    assert seq._last_new == {2: 557, 3: 3904, 9: 27334}


def test_index_of_last_new_subword_rejects_empty_words(sequence):
    with pytest.raises(ValueError):
        sequence.index_of_last_new_subword(0)


def test_short_base_scan_raises():
    seq = SymbolSequence(0, config=SequenceConfig(base_scan_length=10))
    with pytest.raises(SequenceTooShortError):
        seq.index_of_last_new_symbol()
    with pytest.raises(SequenceTooShortError):
        seq.index_of_last_new_symbol_pair()


def test_collinear_search_intervals_for_single_symbols():
    intervals = SymbolSequence(1000).collinear_search_intervals(1)
    assert intervals == [
        Interval(0, 3),
        Interval(4, 5),
        Interval(9, 10),
        Interval(11, 12),
        Interval(29, 31),
        Interval(78, 80),
        Interval(212, 213),
        Interval(214, 215),
    ]


def test_collinear_search_intervals_for_pairs():
    intervals = SymbolSequence(1000).collinear_search_intervals(2)
    assert intervals == [
        Interval(0, 6),
        Interval(7, 13),
        Interval(28, 35),
        Interval(77, 84),
        Interval(210, 216),
        Interval(553, 559),
    ]


def test_merge_new_windows_joins_touching_spans():
    flags = [True, True, False, False, False, True, False]
    assert merge_new_windows(flags, 2) == [Interval(0, 3), Interval(5, 7)]
    assert merge_new_windows([True, False, True], 2) == [Interval(0, 4)]


def test_interval_str():
    assert str(Interval(3, 9)) == "[3,9]"


def test_vectors_follow_symbols(sequence):
    assert sequence.vectors(0, 7) == "ijiikii"
    assert VECTOR_MAP == "ijk" * 4


def test_last_new_vector_sequence_of_length_one():
    assert SymbolSequence(10).index_of_last_new_vector_sequence(1) == 4


@pytest.mark.parametrize("length", [2, 3, 5, 8])
def test_last_new_vector_sequence_matches_first_occurrences(length):
    seq = SymbolSequence(60000)
    letters = "".join(VECTOR_MAP[symbol] for symbol in seq.symbols())
    first_seen = {}
    for i in range(len(letters) - length + 1):
        first_seen.setdefault(letters[i : i + length], i)

    last_new = seq.index_of_last_new_vector_sequence(length)
    assert last_new == max(first_seen.values())
    assert last_new <= seq.index_of_last_new_subword(length)
