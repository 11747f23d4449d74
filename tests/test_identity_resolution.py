# tests/test_identity_resolution.py

from __future__ import annotations

import pytest

from villain_timeline.identity import IdentityKey, canonical_url, slugify, villain_id
from villain_timeline.processing import IdentityResolver, select_primary_name
from villain_timeline.registry import Antagonist, IssueRecord
from villain_timeline.taxonomy import GroupClassifier

WIKI = "https://marvel.fandom.com/wiki/"
GOBLIN_URL = WIKI + "Norman_Osborn_(Earth-616)"


@pytest.fixture
def resolver(registry):
    return IdentityResolver(GroupClassifier(registry))


def issue(number, *mentions):
    return IssueRecord(
        issue_number=number,
        title=f"#{number}",
        antagonists=[
            m if isinstance(m, Antagonist) else Antagonist(name=m) for m in mentions
        ],
    )


# -----------------------------
# Keys and ids
# -----------------------------

def test_canonical_url_strips_query_and_fragment():
    assert canonical_url(GOBLIN_URL + "?action=edit#History") == GOBLIN_URL
    assert canonical_url("   ") is None
    assert canonical_url(None) is None


def test_ids_from_url_and_name():
    assert villain_id(GOBLIN_URL) == "Norman_Osborn_(Earth-616)"
    assert villain_id("Green Goblin") == "green-goblin"
    assert slugify("  Doctor Octopus!! ") == "doctor-octopus"


def test_identity_keys_are_tagged_by_source():
    by_name = IdentityKey.for_mention(None, "Green Goblin")
    by_url = IdentityKey.for_mention(GOBLIN_URL, "Green Goblin")

    assert by_name == IdentityKey("name", "Green Goblin")
    assert by_url.is_url
    assert by_name != by_url
    assert IdentityKey("name", GOBLIN_URL) != IdentityKey("url", GOBLIN_URL)


# -----------------------------
# Resolution
# -----------------------------

def test_name_keyed_and_url_keyed_identities_stay_separate(resolver):
    result = resolver.resolve([
        issue(1, "Green Goblin"),
        issue(2, Antagonist(name="Green Goblin", url=GOBLIN_URL)),
    ])

    villains = result.villain_list()
    assert len(villains) == 2

    by_source = {v.identity_source: v for v in villains}
    assert by_source["name"].appearances == [1]
    assert by_source["name"].id == "green-goblin"
    assert by_source["name"].url is None
    assert by_source["url"].appearances == [2]
    assert by_source["url"].id == "Norman_Osborn_(Earth-616)"


def test_url_keyed_identities_are_listed_first(resolver):
    result = resolver.resolve([
        issue(1, "Tinkerer"),
        issue(2, Antagonist(name="Green Goblin", url=GOBLIN_URL)),
    ])
    assert [v.identity_source for v in result.villain_list()] == ["url", "name"]


def test_same_url_collects_name_variants(resolver):
    url = WIKI + "Spencer_Smythe_(Earth-616)"
    result = resolver.resolve([
        issue(1, Antagonist(name="Spider-Slayer", url=url)),
        issue(2, Antagonist(name="Spencer Smythe", url=url)),
        issue(3, Antagonist(name="Spider-Slayer", url=url)),
    ])

    (villain,) = result.villain_list()
    assert villain.name == "Spider-Slayer"
    assert villain.aliases == ["Spencer Smythe"]
    assert villain.appearances == [1, 2, 3]
    assert villain.frequency == 3


def test_primary_name_tie_goes_to_first_encountered(resolver):
    url = WIKI + "Quentin_Beck_(Earth-616)"
    result = resolver.resolve([
        issue(1, Antagonist(name="Mysterio", url=url)),
        issue(2, Antagonist(name="Quentin Beck", url=url)),
    ])
    assert result.villain_list()[0].name == "Mysterio"


def test_select_primary_name():
    assert select_primary_name({"A": 1, "B": 3, "C": 3}) == "B"
    assert select_primary_name({}) == ""


def test_query_string_variants_share_an_identity(resolver):
    result = resolver.resolve([
        issue(1, Antagonist(name="Green Goblin", url=GOBLIN_URL + "?oldid=1")),
        issue(2, Antagonist(name="Green Goblin", url=GOBLIN_URL + "#Powers")),
    ])

    (villain,) = result.villain_list()
    assert villain.url == GOBLIN_URL
    assert villain.appearances == [1, 2]


def test_repeat_mention_in_one_issue_counts_once(resolver):
    result = resolver.resolve([issue(5, "Electro", "Electro (Max Dillon)")])

    (villain,) = result.villain_list()
    assert villain.appearances == [5]
    assert villain.frequency == 1
    assert villain.name_frequency == {"Electro": 2}


def test_appearances_are_sorted(resolver):
    result = resolver.resolve([issue(9, "Lizard"), issue(3, "Lizard"), issue(6, "Lizard")])

    (villain,) = result.villain_list()
    assert villain.appearances == [3, 6, 9]
    assert villain.first_appearance == 9


def test_placeholders_are_skipped(resolver):
    result = resolver.resolve([issue(1, "Unknown", "Unnamed Thug", "?", "(Unidentified)", "Vulture")])

    assert [v.name for v in result.villain_list()] == ["Vulture"]
    assert result.skipped_mentions == 4


def test_groups_are_tracked_apart_from_individuals(resolver):
    result = resolver.resolve([
        issue(3, "Sinister Six", "Vulture"),
        issue(4, "The Sinister Six", "Sandman"),
    ])

    assert [v.name for v in result.villain_list()] == ["Vulture", "Sandman"]

    groups = result.group_list()
    assert [g.name for g in groups] == ["Sinister Six", "The Sinister Six"]
    assert groups[0].id == "sinister-six"
    assert all(v.kind == "individual" for v in result.villain_list())


def test_group_with_url_is_keyed_by_url(resolver):
    url = WIKI + "Enforcers_(Earth-616)"
    result = resolver.resolve([
        issue(10, Antagonist(name="Enforcers", url=url)),
        issue(11, Antagonist(name="The Enforcers", url=url)),
    ])

    (group,) = result.group_list()
    assert group.appearances == [10, 11]
    assert group.frequency == 2
    assert group.id == "Enforcers_(Earth-616)"


def test_first_image_url_is_kept(resolver):
    result = resolver.resolve([
        issue(1, Antagonist(name="Green Goblin", url=GOBLIN_URL)),
        issue(2, Antagonist(name="Green Goblin", url=GOBLIN_URL, image_url="first.png")),
        issue(3, Antagonist(name="Green Goblin", url=GOBLIN_URL, image_url="second.png")),
    ])
    assert result.villain_list()[0].image_url == "first.png"


def test_identity_source_is_fixed_at_creation(resolver):
    result = resolver.resolve([issue(1, "Green Goblin"), issue(2, "Green Goblin")])

    (villain,) = result.villain_list()
    assert villain.identity_source == "name"
    assert villain.appearances == [1, 2]
