import logging
import tempfile
from datetime import date, datetime, timezone
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from riseblog.config import BlogConfig
from riseblog.content.loader import PostLoader
from riseblog.core.types import Locale
from riseblog.exceptions import UnsupportedLocaleError

from conftest import ContentSite


class TestCollectionShape:
    def test_missing_content_root_yields_empty_collection(self, site: ContentSite) -> None:
        assert site.loader().load_collection("en") == []

    def test_posts_sorted_newest_first(self, site: ContentSite) -> None:
        site.add_post("older", date="2024-03-01")
        site.add_post("newest", date="2025-06-30")
        site.add_post("middle", date="2024-12-24")

        slugs = [post.slug for post in site.loader().load_collection("en")]

        assert slugs == ["newest", "middle", "older"]

    def test_same_date_keeps_directory_order(self, site: ContentSite) -> None:
        for name in ("b-post", "a-post", "c-post"):
            site.add_post(name, date="2025-01-01")

        slugs = [post.slug for post in site.loader().load_collection("en")]

        assert slugs == ["a-post", "b-post", "c-post"]

    def test_accepts_locale_enum_and_code(self, site: ContentSite) -> None:
        site.add_post("hello", title_sk="Ahoj")
        loader = site.loader()

        assert loader.load_collection(Locale.SK) == loader.load_collection("SK")

    def test_unsupported_locale_raises(self, site: ContentSite) -> None:
        with pytest.raises(UnsupportedLocaleError):
            site.loader().load_collection("de")


class TestSkippedEntries:
    def test_directory_without_index_document_is_skipped(self, site: ContentSite) -> None:
        site.add_post("migrated")
        site.write_document("legacy", "---\ntitle: Old\n---\nbody", filename="en.mdx")
        (site.posts_dir / "notes.txt").write_text("not a post", encoding="utf-8")

        slugs = [post.slug for post in site.loader().load_collection("en")]

        assert slugs == ["migrated"]

    def test_malformed_front_matter_is_skipped(self, site: ContentSite, caplog: pytest.LogCaptureFixture) -> None:
        site.add_post("good")
        site.write_document("broken", "---\ntitle_en: [unclosed\ndate: 2025-01-01\n---\nbody")

        with caplog.at_level(logging.WARNING):
            posts = site.loader().load_collection("en")

        assert [post.slug for post in posts] == ["good"]
        assert "broken" in caplog.text

    def test_invalid_date_is_skipped(self, site: ContentSite) -> None:
        site.add_post("good")
        site.add_post("bad-date", date="sometime soon")
        site.add_post("no-date", date=None)

        slugs = [post.slug for post in site.loader().load_collection("en")]

        assert slugs == ["good"]

    def test_unreadable_bytes_are_skipped(self, site: ContentSite) -> None:
        site.add_post("good")
        directory = site.posts_dir / "binary"
        directory.mkdir(parents=True)
        (directory / "index.mdx").write_bytes(b"\xff\xfe\x00not utf-8")

        slugs = [post.slug for post in site.loader().load_collection("en")]

        assert slugs == ["good"]


class TestLocaleResolution:
    def test_untranslated_post_only_in_other_locale(self, site: ContentSite) -> None:
        site.add_post("both", title_sk="Oba")
        site.add_post("english-only")
        site.add_post("slovak-only", title_en="", title_sk="Iba po slovensky")

        en = {post.slug for post in site.loader().load_collection("en")}
        sk = {post.slug for post in site.loader().load_collection("sk")}

        assert en == {"both", "english-only"}
        assert sk == {"both", "slovak-only"}

    def test_blank_title_counts_as_untranslated(self, site: ContentSite) -> None:
        site.add_post("spaces", title_sk="   ")

        assert site.loader().load_collection("sk") == []

    def test_locale_fields_are_selected(self, site: ContentSite) -> None:
        site.add_post(
            "bilingual",
            title_sk="Dvojjazyčný",
            excerpt_en="English excerpt",
            excerpt_sk="Slovenský úryvok",
            content_sk="Slovenské telo článku.",
            body="English body of the post.",
            seo_en={"title": "SEO EN", "keywords": "web, react"},
            seo_sk={"description": "Popis"},
        )
        loader = site.loader()

        [en] = loader.load_collection("en")
        [sk] = loader.load_collection("sk")

        assert (en.title, en.excerpt, en.content.strip()) == (
            "Title bilingual",
            "English excerpt",
            "English body of the post.",
        )
        assert (sk.title, sk.excerpt, sk.content) == ("Dvojjazyčný", "Slovenský úryvok", "Slovenské telo článku.")
        assert en.seo is not None and en.seo.title == "SEO EN" and en.seo.keywords == "web, react"
        assert sk.seo is not None and sk.seo.description == "Popis" and sk.seo.title is None
        assert en.locale is Locale.EN and sk.locale is Locale.SK

    def test_empty_seo_block_is_absent(self, site: ContentSite) -> None:
        site.add_post("plain", seo_en={"title": "", "description": None})

        [post] = site.loader().load_collection("en")

        assert post.seo is None

    def test_slug_override_applies_to_slovak_only(self, site: ContentSite) -> None:
        site.add_post("how-to", title_sk="Ako na to", slug_sk="ako-na-to")
        site.add_post("no-override", title_sk="Bez", slug_sk="")
        loader = site.loader()

        en = {post.directory_slug: post.slug for post in loader.load_collection("en")}
        sk = {post.directory_slug: post.slug for post in loader.load_collection("sk")}

        assert en == {"how-to": "how-to", "no-override": "no-override"}
        assert sk == {"how-to": "ako-na-to", "no-override": "no-override"}


class TestDerivedFields:
    def test_reading_time_from_resolved_body(self, site: ContentSite) -> None:
        site.add_post("long", body="word " * 450, title_sk="Dlhý", content_sk="slovo " * 50)
        loader = site.loader()

        [en] = loader.load_collection("en")
        [sk] = loader.load_collection("sk")

        assert en.reading_time == 3
        assert sk.reading_time == 1

    def test_empty_body_reads_in_one_minute(self, site: ContentSite) -> None:
        site.add_post("title-only", body="", title_sk="Iba nadpis")

        [en] = site.loader().load_collection("en")
        [sk] = site.loader().load_collection("sk")

        assert en.reading_time == sk.reading_time == 1

    def test_words_per_minute_is_configurable(self, site: ContentSite) -> None:
        site.add_post("short", body="word " * 100)

        [post] = site.loader(words_per_minute=50).load_collection("en")

        assert post.reading_time == 2

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (date(2025, 2, 3), "2025-02-03"),
            ("2025-02-03", "2025-02-03"),
            (datetime(2025, 2, 3, 23, 30), "2025-02-03"),
            ("2025-02-03T10:00:00Z", "2025-02-03"),
            (datetime(2025, 2, 3, 23, 30, tzinfo=timezone.utc), "2025-02-03"),
        ],
    )
    def test_date_normalised_to_calendar_string(self, site: ContentSite, raw: object, expected: str) -> None:
        site.add_post("dated", date=raw)

        [post] = site.loader().load_collection("en")

        assert post.date == expected
        assert post.published == date.fromisoformat(expected)

    def test_media_and_flags_are_copied(self, site: ContentSite) -> None:
        site.add_post(
            "media",
            coverImage="/images/blog/cover.webp",
            coverImageAlt="A cover",
            galleryImages=["/images/a.webp", "/images/b.webp"],
            featured=True,
        )

        [post] = site.loader().load_collection("en")

        assert post.cover_image == "/images/blog/cover.webp"
        assert post.cover_image_alt == "A cover"
        assert post.gallery_images == ("/images/a.webp", "/images/b.webp")
        assert post.featured is True
        assert post.draft is False


class TestRelationships:
    def test_author_resolved_per_locale(self, site: ContentSite) -> None:
        site.add_author("jane", name="Jane Doe", avatar="/images/avatars/jane.png", role_en="CTO", role_sk="Technická riaditeľka")
        site.add_post("by-jane", author="jane", title_sk="Od Jane")
        loader = site.loader()

        [en] = loader.load_collection("en")
        [sk] = loader.load_collection("sk")

        assert en.author is not None and en.author.name == "Jane Doe" and en.author.role == "CTO"
        assert sk.author is not None and sk.author.role == "Technická riaditeľka"
        assert en.author.avatar == "/images/avatars/jane.png"

    def test_missing_author_record_falls_back_to_slug(self, site: ContentSite) -> None:
        site.add_post("ghost", author="nobody")

        [post] = site.loader().load_collection("en")

        assert post.author is not None
        assert post.author.name == "nobody"
        assert post.author.resolved is False

    def test_no_author_field(self, site: ContentSite) -> None:
        site.add_post("anonymous")

        [post] = site.loader().load_collection("en")

        assert post.author is None

    def test_non_string_author_is_ignored_and_logged(
        self, site: ContentSite, caplog: pytest.LogCaptureFixture
    ) -> None:
        site.add_post("listed-author", author=["jane", "peter"])
        site.add_post("odd-tags", tags="not-a-list")

        with caplog.at_level(logging.DEBUG, logger="riseblog.content.source"):
            posts = {post.slug: post for post in site.loader().load_collection("en")}

        assert posts["listed-author"].author is None
        assert "Ignoring non-string author ['jane', 'peter'] in post listed-author" in caplog.text
        assert "Tags of post odd-tags are not a list: 'not-a-list'" in caplog.text

    def test_tags_resolved_in_order(self, site: ContentSite) -> None:
        site.add_tag("web-development", name_en="Web Development", name_sk="Tvorba webov", slug_sk="tvorba-webov")
        site.add_tag("ai", name_en="AI")
        site.add_post("tagged", tags=["web-development", "unknown-tag", "ai"], title_sk="Označený")
        loader = site.loader()

        [en] = loader.load_collection("en")
        [sk] = loader.load_collection("sk")

        assert en.tags == ("Web Development", "unknown-tag", "AI")
        assert sk.tags == ("Tvorba webov", "unknown-tag", "AI")
        assert en.tag_slugs == sk.tag_slugs == ("web-development", "unknown-tag", "ai")

    def test_tags_absent_or_empty(self, site: ContentSite) -> None:
        site.add_post("no-tags")
        site.add_post("empty-tags", tags=[])
        site.add_post("odd-tags", tags="not-a-list")

        posts = {post.slug: post for post in site.loader().load_collection("en")}

        assert posts["no-tags"].tags is None
        assert posts["empty-tags"].tags == ()
        assert posts["odd-tags"].tags == ()


class TestDrafts:
    def test_drafts_hidden_outside_development(self, site: ContentSite) -> None:
        site.add_post("live")
        site.add_post("wip", draft=True)

        assert [post.slug for post in site.loader().load_collection("en")] == ["live"]

    def test_drafts_visible_in_development(self, site: ContentSite) -> None:
        site.add_post("live", date="2025-01-01")
        site.add_post("wip", date="2025-01-02", draft=True)

        posts = site.loader(development=True).load_collection("en")

        assert [post.slug for post in posts] == ["wip", "live"]
        assert posts[0].draft is True

    def test_explicit_flag_overrides_development(self, site: ContentSite) -> None:
        site.add_post("wip", draft=True)

        assert site.loader(development=True).load_collection("en", include_drafts=False) == []
        assert len(site.loader().load_collection("en", include_drafts=True)) == 1


class TestLookups:
    def test_get_post_by_locale_slug(self, site: ContentSite) -> None:
        site.add_post("how-to", title_sk="Ako na to", slug_sk="ako-na-to")
        loader = site.loader()

        assert loader.get_post("ako-na-to", "sk").directory_slug == "how-to"
        assert loader.get_post("how-to", "sk") is None
        assert loader.get_post("how-to", "en").title == "Title how-to"

    def test_from_config_uses_configured_paths(self, site: ContentSite) -> None:
        site.add_post("configured")

        loader = PostLoader.from_config(BlogConfig.load(site.root))

        assert [post.slug for post in loader.load_collection("en")] == ["configured"]


@settings(max_examples=25, deadline=None)
@given(st.lists(st.dates(min_value=date(2000, 1, 1), max_value=date(2099, 12, 31)), min_size=1, max_size=8))
def test_collection_dates_never_increase(dates: list[date]) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        site = ContentSite(root=Path(tmp))
        for index, post_date in enumerate(dates):
            site.add_post(f"post-{index}", date=post_date.isoformat())

        posts = site.loader().load_collection("en")

    assert len(posts) == len(dates)
    assert all(a.date >= b.date for a, b in zip(posts, posts[1:]))
