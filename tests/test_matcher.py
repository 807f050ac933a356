# ===============================================
# tests/test_matcher.py
# Direct and taxonomy-expanded matching.
# ===============================================
from medialib.search.matcher import matches, query_terms
from medialib.search.taxonomy import Taxonomy, load_taxonomy
from medialib.search.types import SearchQuery


def test_query_terms_lowercase_and_drop_blank_tokens():
    assert query_terms("  Chill   VIBES ") == ["chill", "vibes"]


def test_direct_match_on_title_or_artist(make_track):
    item = make_track("Peaceful Morning", "Jane Doe")
    assert matches(item, SearchQuery(text="MORNING", mode="keyword"))
    assert matches(item, SearchQuery(text="doe", mode="keyword"))
    assert matches(item, SearchQuery(text="nothing jane", mode="keyword"))
    assert not matches(item, SearchQuery(text="evening", mode="keyword"))


def test_category_name_expands_in_semantic_mode(make_track):
    item = make_track("Peaceful Morning", "Jane Doe")
    assert matches(item, SearchQuery(text="relaxing", mode="semantic"))
    assert matches(item, SearchQuery(text="relaxing", mode="hybrid"))


def test_keyword_mode_never_expands(make_track):
    item = make_track("Calm Waters", "Lo Fi Crew")
    assert not matches(item, SearchQuery(text="ambient", mode="keyword"))
    # same item is reachable through the relaxing/study keyword sets
    assert matches(item, SearchQuery(text="ambient", mode="semantic"))


def test_term_inside_category_name_triggers_expansion(make_track):
    item = make_track("Piano Sonata", "Ludwig")
    assert matches(item, SearchQuery(text="class", mode="semantic"))


def test_first_triggered_category_decides(make_track):
    # "chill" is a keyword of relaxing (scanned first) and of night; only
    # relaxing's keywords are checked, and none of them fit this item.
    item = make_track("Late Night Drive", "Nocturne")
    assert not matches(item, SearchQuery(text="chill", mode="semantic"))


def test_custom_taxonomy_is_respected(make_track):
    taxonomy = Taxonomy({"cozy": ("fireplace", "blanket")})
    item = make_track("Fireplace Sounds", "Hearth")
    assert matches(item, SearchQuery(text="cozy", mode="semantic"), taxonomy)
    assert not matches(item, SearchQuery(text="cozy", mode="semantic"), Taxonomy({}))


def test_bundled_taxonomy_keeps_declaration_order():
    taxonomy = load_taxonomy()
    names = list(taxonomy)
    assert names[:4] == ["relaxing", "energetic", "sad", "happy"]
    assert names[-1] == "high quality"
    assert len(taxonomy) == 20
    assert "peaceful" in taxonomy["relaxing"]
    assert taxonomy["sleep"] == ("lullaby", "nature sounds", "white noise", "peaceful")
