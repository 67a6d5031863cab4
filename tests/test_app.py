# tests/test_app.py
from pathlib import Path

from streamlit.testing.v1 import AppTest

APP = str(Path(__file__).resolve().parents[1] / "app.py")


def button(at, label):
    return next(b for b in at.button if b.label == label)


def test_app_loads_first_preset():
    at = AppTest.from_file(APP, default_timeout=30).run()
    assert not at.exception
    assert at.info[0].value == "Puzzle loaded #1"
    assert at.text_input(key="cell_0_0").value == "5"
    assert at.text_input(key="cell_0_0").disabled


def test_app_validate_and_solve():
    at = AppTest.from_file(APP, default_timeout=30).run()
    button(at, "Validate").click().run()
    assert at.success[0].value == "Board valid"

    button(at, "Solve").click().run()
    assert not at.exception
    assert at.success[0].value.startswith("Solved in")
    assert at.text_input(key="cell_0_2").value == "4"


def test_app_reports_conflicts():
    at = AppTest.from_file(APP, default_timeout=30).run()
    at.text_input(key="cell_0_2").input("5")  # clashes with the given 5 at r1c1
    button(at, "Solve").click().run()
    assert at.error[0].value == "Conflicts found"
    assert at.text_input(key="cell_1_1").value == ""
