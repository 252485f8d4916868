import os
import re

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _dependencies():
    with open(os.path.join(ROOT, "pyproject.toml"), encoding="utf-8") as f:
        text = f.read()
    block = re.search(r"^dependencies = \[(.*?)\]", text, re.S | re.M).group(1)
    return {re.split(r"[<>=!~ ]", dep.strip().strip('",'))[0].lower()
            for dep in block.splitlines() if dep.strip()}


def test_directly_imported_libraries_are_declared():
    deps = _dependencies()

    for name in ("flask", "werkzeug", "flask-sqlalchemy", "sqlalchemy", "flask-cors",
                 "flask-limiter", "python-dotenv", "email-validator", "click"):
        assert name in deps
