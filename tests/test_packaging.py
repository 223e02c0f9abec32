import re
from pathlib import Path

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def test_client_script_is_not_installed_as_a_module():
    match = re.search(r"^py-modules = \[(.*)\]$", PYPROJECT.read_text(), re.MULTILINE)
    modules = [m.strip().strip('"') for m in match.group(1).split(",")]
    assert "client" not in modules
    assert "main_server" in modules
