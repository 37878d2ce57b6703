from config import AREAS, EXAMPLE_PROMPTS, INTERESTS
from keyboards import (
    build_areas_keyboard,
    build_budget_keyboard,
    build_examples_keyboard,
    build_interests_keyboard,
    build_maps_keyboard
)


def _buttons(markup):
    return [button for row in markup.inline_keyboard for button in row]


def test_interests_keyboard_marks_selection():
    buttons = _buttons(build_interests_keyboard(["nature"]))

    assert len(buttons) == len(INTERESTS) + 1
    by_data = {b.callback_data: b.text for b in buttons}
    assert by_data["int_nature"].startswith("✅")
    assert by_data["int_food"].startswith("⬜")
    assert "int_done" in by_data


def test_areas_keyboard_has_every_area():
    data = [b.callback_data for b in _buttons(build_areas_keyboard([]))]

    assert data == [f"area_{a}" for a in AREAS] + ["area_done"]


def test_budget_keyboard_values():
    data = [b.callback_data for b in _buttons(build_budget_keyboard())]

    assert data == ["bud_low", "bud_medium", "bud_high"]


def test_examples_keyboard_indexes_prompts():
    data = [b.callback_data for b in _buttons(build_examples_keyboard())]

    assert data == [f"ex_{i}" for i in range(len(EXAMPLE_PROMPTS))]


def test_maps_keyboard_is_a_link():
    button = _buttons(build_maps_keyboard("https://maps.example"))[0]

    assert button.url == "https://maps.example"
