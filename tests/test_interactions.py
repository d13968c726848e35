"""
Tests for the interaction sets and recipe id canonicalization.

Recipe ids arrive as numbers from one provider and as prefixed strings from
another. These tests verify that every operation canonicalizes ids the same way.
"""

import pytest

from recipe_client.errors import InvalidRecipeIdError
from recipe_client.interactions import FAVORITES, LIKED, WATCHED, InteractionSet, InteractionSets
from recipe_client.models import canonical_recipe_id


class TestCanonicalRecipeId:
    """Test cases for canonical_recipe_id."""

    @pytest.mark.parametrize(
        "raw_id,expected",
        [
            (7, "7"),
            ("7", "7"),
            (" 7 ", "7"),
            ("S123", "S123"),
            ("  S123\n", "S123"),
            (663050, "663050"),
        ],
    )
    def test_canonical_form(self, raw_id, expected):
        """Test numeric and prefixed ids map to trimmed strings."""
        assert canonical_recipe_id(raw_id) == expected

    @pytest.mark.parametrize("raw_id", [None, "", "   ", True])
    def test_missing_id_rejected(self, raw_id):
        """Test that missing or blank ids raise InvalidRecipeIdError."""
        with pytest.raises(InvalidRecipeIdError, match="Recipe ID is required"):
            canonical_recipe_id(raw_id)

    def test_invalid_id_error_is_value_error(self):
        """Test that validation failures can be caught as ValueError."""
        with pytest.raises(ValueError):
            canonical_recipe_id("")


class TestInteractionSet:
    """Test cases for a single InteractionSet."""

    def test_add_numeric_and_string_are_same_member(self):
        """Test that 7 and "7" canonicalize to the same member."""
        favorites = InteractionSet(FAVORITES)
        favorites.add(7)
        assert favorites.contains(7)
        assert favorites.contains("7")
        assert "7" in favorites
        favorites.add("7")
        assert len(favorites) == 1

    def test_prefixed_ids_are_not_coerced(self):
        """Test that provider-prefixed ids pass through unchanged."""
        favorites = InteractionSet(FAVORITES)
        favorites.add("S42")
        assert favorites.contains("S42")
        assert not favorites.contains(42)
        assert favorites.ids() == ["S42"]

    def test_add_is_idempotent(self):
        """Test that adding twice keeps a single member."""
        liked = InteractionSet(LIKED)
        liked.add("1")
        liked.add(" 1 ")
        assert liked.ids() == ["1"]

    def test_remove_absent_is_noop(self):
        """Test that removing a missing id does nothing."""
        liked = InteractionSet(LIKED)
        liked.add("1")
        liked.remove("2")
        assert liked.ids() == ["1"]

    def test_remove_canonicalizes(self):
        """Test that removal matches by canonical form."""
        liked = InteractionSet(LIKED)
        liked.add("5")
        liked.remove(5)
        assert len(liked) == 0

    def test_toggle_returns_resulting_membership(self):
        """Test that toggle reports whether the recipe is now present."""
        watched = InteractionSet(WATCHED)
        assert watched.toggle(3) is True
        assert watched.contains("3")
        assert watched.toggle("3") is False
        assert not watched.contains(3)

    @pytest.mark.parametrize("initial", [[], ["9"]])
    def test_toggle_twice_restores_membership(self, initial):
        """Test that toggle is its own inverse."""
        favorites = InteractionSet(FAVORITES)
        favorites.replace_all(initial)
        before = favorites.contains(9)

        first = favorites.toggle(9)
        second = favorites.toggle(9)

        assert first is not second
        assert first is (not before)
        assert favorites.contains(9) is before

    def test_replace_all_discards_previous_content(self):
        """Test that replace_all installs exactly the new ids."""
        favorites = InteractionSet(FAVORITES)
        favorites.add("old")
        favorites.replace_all([1, "2", " S3 ", 1])
        assert favorites.ids() == ["1", "2", "S3"]
        assert not favorites.contains("old")

    def test_replace_all_with_invalid_id_keeps_previous_content(self):
        """Test that a failed replace leaves the set untouched."""
        favorites = InteractionSet(FAVORITES)
        favorites.add("keep")
        with pytest.raises(InvalidRecipeIdError):
            favorites.replace_all(["1", None])
        assert favorites.ids() == ["keep"]

    def test_toggle_without_id_rejected(self):
        """Test that toggle validates the id before changing anything."""
        favorites = InteractionSet(FAVORITES)
        with pytest.raises(InvalidRecipeIdError):
            favorites.toggle(None)
        assert len(favorites) == 0


class TestInteractionSets:
    """Test cases for the grouped interaction sets."""

    def test_get_by_kind(self):
        """Test lookup of each set by kind name."""
        sets = InteractionSets()
        assert sets.get(FAVORITES) is sets.favorites
        assert sets.get(LIKED) is sets.liked
        assert sets.get(WATCHED) is sets.watched

    def test_get_unknown_kind(self):
        """Test that unknown kinds raise KeyError."""
        with pytest.raises(KeyError):
            InteractionSets().get("bookmarks")

    def test_sets_are_independent(self):
        """Test that the same recipe can be in one set and not another."""
        sets = InteractionSets()
        sets.favorites.add(1)
        assert sets.favorites.contains(1)
        assert not sets.liked.contains(1)
        assert not sets.watched.contains(1)

    def test_bulk_statuses(self):
        """Test badge flags for a list of recipes in one pass."""
        sets = InteractionSets()
        sets.favorites.replace_all([1, "S2"])
        sets.liked.replace_all(["1"])
        sets.watched.replace_all([3])

        statuses = sets.statuses([1, "S2", 3, 4])

        assert list(statuses) == ["1", "S2", "3", "4"]
        assert statuses["1"].is_favorite and statuses["1"].is_liked and not statuses["1"].is_watched
        assert statuses["S2"].is_favorite and not statuses["S2"].is_liked
        assert statuses["3"].is_watched and not statuses["3"].is_favorite
        assert not any([statuses["4"].is_favorite, statuses["4"].is_liked, statuses["4"].is_watched])

    def test_clear_empties_all_sets(self):
        """Test that clear resets favorites, liked and watched."""
        sets = InteractionSets()
        sets.favorites.add(1)
        sets.liked.add(2)
        sets.watched.add(3)
        sets.clear()
        assert len(sets.favorites) == len(sets.liked) == len(sets.watched) == 0
