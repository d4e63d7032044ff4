import pytest

from app.core.slug import assign_slug, base_slug


def taken(*slugs):
    """Existence check reporting the given slugs as used, recording every query."""
    queried = []

    async def exists_check(candidate):
        queried.append(candidate)
        return candidate in slugs

    exists_check.queried = queried
    return exists_check


async def never_taken(candidate):
    return False


class TestBaseSlug:
    def test_punctuation_is_removed(self):
        assert base_slug("Hello World!") == "hello-world"

    def test_lowercases_and_trims(self):
        assert base_slug("  Python Tips  ") == "python-tips"

    def test_separator_runs_collapse_to_single_hyphen(self):
        assert base_slug("a  b__c - -d") == "a-b-c-d"

    def test_leading_and_trailing_hyphens_stripped(self):
        assert base_slug("--Draft--") == "draft"
        assert base_slug("!!! news ???") == "news"

    def test_removed_characters_do_not_leave_separators(self):
        assert base_slug("C# & .NET") == "c-net"
        assert base_slug("don't stop") == "dont-stop"

    def test_digits_kept(self):
        assert base_slug("Top 10 in 2024") == "top-10-in-2024"

    def test_bengali_kept_verbatim(self):
        assert base_slug("আমার প্রথম ব্লগ") == "আমার-প্রথম-ব্লগ"

    def test_mixed_bengali_and_latin(self):
        assert base_slug("Next.js ও টেইলউইন্ড!") == "nextjs-ও-টেইলউইন্ড"

    def test_other_scripts_are_dropped(self):
        assert base_slug("Café Привет") == "caf"

    def test_title_without_usable_characters_is_empty(self):
        assert base_slug("!!!") == ""
        assert base_slug("   ") == ""


class TestAssignSlug:
    @pytest.mark.asyncio
    async def test_free_base_slug_is_used(self):
        assert await assign_slug("Hello World!", never_taken) == "hello-world"

    @pytest.mark.asyncio
    async def test_same_title_gives_same_slug(self):
        first = await assign_slug("Hello World!", never_taken)
        second = await assign_slug("Hello World!", never_taken)
        assert first == second

    @pytest.mark.asyncio
    async def test_suffix_skips_taken_candidates(self):
        check = taken("hello-world", "hello-world-1")
        assert await assign_slug("Hello World!", check) == "hello-world-2"
        assert check.queried == ["hello-world", "hello-world-1", "hello-world-2"]

    @pytest.mark.asyncio
    async def test_first_suffix_is_one(self):
        assert await assign_slug("Hello World", taken("hello-world")) == "hello-world-1"

    @pytest.mark.asyncio
    async def test_titles_with_same_base_share_counter(self):
        check = taken("hello-world", "hello-world-1", "hello-world-2", "hello-world-3")
        assert await assign_slug("hello   WORLD", check) == "hello-world-4"

    @pytest.mark.asyncio
    async def test_freed_numbers_are_not_reused(self):
        # hello-world-1 was deleted, but the base is still taken
        check = taken("hello-world", "hello-world-2")
        assert await assign_slug("Hello World", check) == "hello-world-1"

    @pytest.mark.asyncio
    async def test_empty_base_slug_gets_bare_suffix(self):
        assert await assign_slug("???", never_taken) == ""
        assert await assign_slug("???", taken("", "-1")) == "-2"
