# ===============================================
# tests/test_scorer.py
# Relevance scoring and smart tags.
# ===============================================
from medialib.search.scorer import days_since, score, tag
from medialib.search.taxonomy import Taxonomy


# --- scoring ---

def test_exact_title_match(make_track, now):
    item = make_track("Workout Mix", "DJ Test")
    # exact 100 + contains 50 + "workout" 20+10 + "mix" 20 + energetic 25
    assert score(item, "workout mix", now=now) == 225
    assert score(item, "Workout Mix  ", now=now) == 225


def test_exact_title_beats_substring_title(make_track, now):
    exact = make_track("Sunrise Drive", "Coastline")
    longer = make_track("Sunrise Drive Remix", "Coastline")
    exact_score = score(exact, "sunrise drive", now=now)
    longer_score = score(longer, "sunrise drive", now=now)
    assert exact_score > longer_score
    assert exact_score - longer_score == 100


def test_artist_rules(make_track, now):
    item = make_track("Peaceful Morning", "Jane Doe")
    # artist contains query 40 + term in artist 15
    assert score(item, "doe", now=now) == 55
    # ... plus artist starts with term 8
    assert score(item, "jane", now=now) == 63


def test_semantic_bonus_counts_each_category(make_track, now):
    item = make_track("Peaceful Morning", "Jane Doe", days_old=0)
    # relaxing (category name) and evening (keyword "relaxing") both carry
    # "peaceful": 2 * 25, plus the one-week recency bonus
    assert score(item, "relaxing", now=now) == 55


def test_recency_bonus_steps(make_track, now):
    taxonomy = Taxonomy({})
    fresh = make_track("Zz", "Yy", days_old=7)
    month = make_track("Zz", "Yy", days_old=8)
    edge = make_track("Zz", "Yy", days_old=30)
    old = make_track("Zz", "Yy", days_old=31)
    base = score(old, "qq", now=now, taxonomy=taxonomy)
    assert base == 0
    assert score(fresh, "qq", now=now, taxonomy=taxonomy) == 5
    assert score(month, "qq", now=now, taxonomy=taxonomy) == 3
    assert score(edge, "qq", now=now, taxonomy=taxonomy) == 3


def test_days_since_floors_elapsed_time(make_track, now):
    from datetime import timedelta
    assert days_since(now - timedelta(hours=47), now) == 1
    assert days_since(now - timedelta(hours=48), now) == 2
    assert days_since(now + timedelta(hours=1), now) == -1


# --- tagging ---

def test_tags_peaceful_morning_keeps_kind(make_track, now):
    item = make_track("Peaceful Morning", "Jane Doe", days_old=0)
    tags = tag(item, "relaxing", now=now)
    assert tags == ("peaceful", "morning", "jane", "relaxing", "sleep", "audio")


def test_tags_content_words_categories_and_kind(make_video, now):
    item = make_video("Gym Session", "Coach Max")
    assert tag(item, "cardio", now=now) == ("session", "coach", "workout", "video")


def test_tags_skip_stop_words_and_short_words(make_track, now):
    item = make_track("With The Wind From Above", "Band")
    assert tag(item, "wind", now=now) == ("wind", "above", "band", "audio")


def test_recency_tags(make_track, now):
    cases = {0: "new", 1: "new", 5: "recent", 7: "recent", 20: "this month", 30: "this month"}
    for days_old, expected in cases.items():
        item = make_track("Zz", "Yy", days_old=days_old)
        assert tag(item, "zz", now=now) == ("audio", expected)
    assert tag(make_track("Zz", "Yy", days_old=31), "zz", now=now) == ("audio",)


def test_tags_capped_and_unique(make_track, now):
    item = make_track("Calm Piano Jazz Dance Party Sunrise", "Studio Singing Guitar Techno", days_old=0)
    tags = tag(item, "calm calm party", now=now)
    assert len(tags) <= 6
    assert len(set(tags)) == len(tags)
    assert "audio" in tags


def test_kind_word_in_title_not_duplicated(make_video, now):
    item = make_video("Video Diary", "Someone")
    tags = tag(item, "qq", now=now, taxonomy=Taxonomy({}))
    assert tags == ("video", "diary", "someone")
