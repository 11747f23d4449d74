import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from villain_timeline.taxonomy.registry import GroupRegistry  # noqa: E402

WIKI = "https://marvel.fandom.com/wiki/"


@pytest.fixture
def registry():
    """Fresh registry seeded with the bundled group list."""
    return GroupRegistry()


@pytest.fixture
def empty_registry():
    return GroupRegistry(load_defaults=False)


@pytest.fixture
def raw_series():
    """Four issues of one series: URL-keyed, name-keyed and group mentions."""
    return {
        "series": "Amazing Spider-Man Vol 1",
        "baseUrl": WIKI + "Amazing_Spider-Man_Vol_1_{issue}",
        "issues": [
            {
                "issueNumber": 1,
                "title": "Amazing Spider-Man #1",
                "releaseDate": "March 10, 1963",
                "antagonists": [
                    {"name": "Chameleon", "url": WIKI + "Dmitri_Smerdyakov_(Earth-616)"},
                ],
            },
            {
                "issueNumber": 2,
                "title": "Amazing Spider-Man #2",
                "releaseDate": "May 1963",
                "antagonists": [
                    {"name": "Vulture", "url": WIKI + "Adrian_Toomes_(Earth-616)"},
                    {"name": "Tinkerer"},
                ],
            },
            {
                "issueNumber": 3,
                "title": "Amazing Spider-Man #3",
                "antagonists": [
                    {"name": "Sinister Six"},
                    {"name": "Vulture", "url": WIKI + "Adrian_Toomes_(Earth-616)"},
                    {
                        "name": "Doctor Octopus (Otto Octavius)",
                        "url": WIKI + "Otto_Octavius_(Earth-616)",
                    },
                ],
            },
            {
                "issueNumber": 4,
                "title": "Amazing Spider-Man #4",
                "antagonists": [
                    {"name": "Sinister Six"},
                    {"name": "Sandman", "url": WIKI + "William_Baker_(Earth-616)"},
                    {"name": "Unknown Thug"},
                ],
            },
        ],
    }
