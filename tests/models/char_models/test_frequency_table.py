import pytest
from models.char_models.frequency_table import CharacterObservation, FrequencyTable


def build_table(text):
    table = FrequencyTable()
    for c in text:
        table.update(c)
    return table


def test_update_new_character():
    table = FrequencyTable()
    table.update("a")

    assert len(table) == 1
    assert table.count_of("a") == 1
    assert "a" in table


def test_update_same_character_twice():
    table = FrequencyTable()
    table.update("a")
    table.update("a")

    # One entry with a count of two, not two entries
    assert len(table) == 1
    assert table.count_of("a") == 2
    assert table.get(0).count == 2


def test_update_rejects_multiple_characters():
    table = FrequencyTable()

    with pytest.raises(ValueError):
        table.update("ab")
    with pytest.raises(ValueError):
        table.update("")

    assert len(table) == 0


def test_iteration_order_is_first_seen_first():
    table = build_table("cabbac")

    assert [obs.character for obs in table] == ["c", "a", "b"]
    assert table.index_of("c") == 0
    assert table.index_of("a") == 1
    assert table.index_of("b") == 2


def test_index_of_missing_character():
    table = build_table("abc")
    assert table.index_of("z") == -1


def test_total_count_and_count_of():
    table = build_table("aab")

    assert table.total_count() == 3
    assert table.count_of("a") == 2
    assert table.count_of("b") == 1
    assert table.count_of("z") == 0


def test_finalize_probabilities():
    table = build_table("aab")
    table.finalize_probabilities()

    a, b = table.to_array()
    assert a.probability == pytest.approx(2 / 3)
    assert a.cumulative_probability == pytest.approx(2 / 3)
    assert b.probability == pytest.approx(1 / 3)
    assert b.cumulative_probability == pytest.approx(1.0)


def test_finalize_probabilities_sum_to_one():
    table = build_table("the quick brown fox jumps over the lazy dog")
    table.finalize_probabilities()

    observations = table.to_array()
    assert sum(obs.probability for obs in observations) == pytest.approx(1.0, abs=1e-9)

    cumulative = [obs.cumulative_probability for obs in observations]
    assert cumulative == sorted(cumulative)
    assert cumulative[-1] == pytest.approx(1.0, abs=1e-9)


def test_finalize_probabilities_recomputes_after_more_updates():
    table = build_table("ab")
    table.finalize_probabilities()
    table.update("a")
    table.finalize_probabilities()

    assert table.get(0).probability == pytest.approx(2 / 3)
    assert table.get(1).cumulative_probability == pytest.approx(1.0)


def test_finalize_probabilities_empty_table():
    table = FrequencyTable()

    with pytest.raises(ValueError, match="empty frequency table"):
        table.finalize_probabilities()


def test_sample_walks_cumulative_distribution():
    table = build_table("aab")
    table.finalize_probabilities()

    assert table.sample(0.0) == "a"
    assert table.sample(0.6) == "a"
    assert table.sample(0.7) == "b"
    assert table.sample(0.999999) == "b"


def test_sample_single_entry():
    table = build_table("xxx")
    table.finalize_probabilities()

    for r in (0.0, 0.25, 0.5, 0.99):
        assert table.sample(r) == "x"


def test_sample_falls_back_to_last_entry():
    table = build_table("ab")
    table.finalize_probabilities()

    # Simulate rounding leaving every cumulative value below the draw
    for obs in table:
        obs.cumulative_probability = 0.5

    assert table.sample(0.9) == "b"


def test_sample_empty_table():
    with pytest.raises(ValueError):
        FrequencyTable().sample(0.5)


def test_get_out_of_range():
    table = build_table("abc")

    with pytest.raises(IndexError):
        table.get(-1)
    with pytest.raises(IndexError):
        table.get(3)
    with pytest.raises(IndexError):
        FrequencyTable().get(0)


def test_get_returns_observation_at_index():
    table = build_table("abc")

    observation = table.get(1)
    assert isinstance(observation, CharacterObservation)
    assert observation.character == "b"


def test_get_every_index_matches_iteration_order():
    table = build_table("the quick brown fox")

    assert [table.get(i) for i in range(len(table))] == table.to_array()
    assert table.get(len(table) - 1).character == "x"


def test_get_first():
    assert FrequencyTable().get_first() is None
    assert build_table("zy").get_first().character == "z"


def test_remove():
    table = build_table("abc")

    assert table.remove("b") is True
    assert len(table) == 2
    assert table.index_of("c") == 1
    assert table.remove("b") is False
    assert table.remove("q") is False


def test_to_array_is_a_copy():
    table = build_table("ab")
    array = table.to_array()
    array.clear()

    assert len(table) == 2


def test_string_representation():
    table = build_table("aab")
    table.finalize_probabilities()

    assert str(table).startswith("((a 2 ")
    assert str(table).count("(") == 3

    single = build_table("x")
    single.finalize_probabilities()
    assert str(single) == "((x 1 1.0 1.0))"
    assert str(FrequencyTable()) == "()"
