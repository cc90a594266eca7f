from morphic_trapezoids import SequenceConfig, SymbolSequence, get_sequence_config, set_sequence_config


def test_get_returns_independent_copy():
    config = get_sequence_config()
    config.base_scan_length = 5
    assert get_sequence_config().base_scan_length == 1000


def test_set_replaces_defaults_for_new_sequences():
    saved = get_sequence_config()
    try:
        set_sequence_config(SequenceConfig(base_scan_length=2000, default_family="float"))
        assert SymbolSequence(1).config.base_scan_length == 2000
        assert get_sequence_config().default_family == "float"
    finally:
        set_sequence_config(saved)
    assert get_sequence_config() == saved


def test_set_copies_its_argument():
    saved = get_sequence_config()
    config = SequenceConfig(sweep_progress_interval=7)
    try:
        set_sequence_config(config)
        config.sweep_progress_interval = 99
        assert get_sequence_config().sweep_progress_interval == 7
    finally:
        set_sequence_config(saved)
