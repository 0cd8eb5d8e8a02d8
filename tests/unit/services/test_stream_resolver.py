"""
Tests de l'extraction des flux (QualityOption).

Verifie le parcours des CDN, le repli sur l'URL directe et l'ordre
720 d'abord.
"""

from dracin.core.entities import QualityOption
from dracin.services.normalization import extract_quality_options, sort_quality_options
from dracin.services.normalization.stream import build_cdn_url
from tests.fixtures.upstream_responses import PRIMARY_DOWNLOAD_RESPONSE


def _qualities(options):
    return [o.quality for o in options]


class TestSortQualityOptions:
    """720 en tete, puis ordre decroissant."""

    def test_720_first_then_descending(self):
        options = [QualityOption(q, f"https://cdn/{q}.mp4") for q in (720, 1080, 480)]
        assert _qualities(sort_quality_options(options)) == [720, 1080, 480]

    def test_720_moved_to_front(self):
        options = [QualityOption(q, f"https://cdn/{q}.mp4") for q in (480, 1080, 720, 540)]
        assert _qualities(sort_quality_options(options)) == [720, 1080, 540, 480]

    def test_stable_for_equal_qualities(self):
        first = QualityOption(1080, "https://cdn/a.mp4")
        second = QualityOption(1080, "https://cdn/b.mp4")
        assert sort_quality_options([first, second]) == [first, second]


class TestBuildCdnUrl:
    def test_relative_paths_get_single_slash(self):
        assert build_cdn_url("/v/1.mp4", "cdn.example.com") == "https://cdn.example.com/v/1.mp4"
        assert build_cdn_url("v/1.mp4", "cdn.example.com/") == "https://cdn.example.com/v/1.mp4"

    def test_absolute_url_kept(self):
        assert build_cdn_url("http://other.example.com/1.mp4", "cdn.example.com") == "https://other.example.com/1.mp4"


class TestExtractQualityOptions:
    """Tests de extract_quality_options."""

    def test_first_empty_cdn_skipped(self):
        """Premier CDN vide, second rempli : les flux du second sont retenus."""
        options = extract_quality_options(PRIMARY_DOWNLOAD_RESPONSE["data"][0])

        assert _qualities(options) == [720, 1080, 480]
        assert all(o.video_url.startswith("https://cdn-b.example.com/v/") for o in options)
        assert options[0].video_url == "https://cdn-b.example.com/v/c-1-720.mp4"

    def test_first_entry_of_producing_cdn_is_default(self):
        options = extract_quality_options(PRIMARY_DOWNLOAD_RESPONSE["data"][0])

        defaults = [o for o in options if o.is_default]
        assert len(defaults) == 1
        assert defaults[0].quality == 1080

    def test_first_populated_cdn_wins(self):
        payload = {
            "cdnList": [
                {"cdnDomain": "a.example.com", "videoPathList": [{"quality": 480, "videoPath": "/1.mp4"}]},
                {"cdnDomain": "b.example.com", "videoPathList": [{"quality": 1080, "videoPath": "/1.mp4"}]},
            ]
        }

        options = extract_quality_options(payload)

        assert _qualities(options) == [480]
        assert options[0].video_url == "https://a.example.com/1.mp4"

    def test_unusable_path_entries_skipped(self):
        payload = {
            "cdnList": [
                {
                    "domain": "a.example.com",
                    "pathList": [{"quality": 1080}, "junk", {"definition": 540, "path": "/540.m3u8"}],
                }
            ]
        }

        options = extract_quality_options(payload)

        assert _qualities(options) == [540]
        assert options[0].is_default

    def test_missing_quality_defaults_to_720(self):
        payload = {"cdnList": [{"cdnDomain": "a.example.com", "videoPathList": [{"videoPath": "/x.mp4"}]}]}
        assert _qualities(extract_quality_options(payload)) == [720]

    def test_oversized_quality_defaults_to_720(self):
        payload = {
            "cdnList": [{"cdnDomain": "a.example.com", "videoPathList": [{"quality": 10**400, "videoPath": "/x.mp4"}]}]
        }
        assert _qualities(extract_quality_options(payload)) == [720]

    def test_direct_url_fallback(self):
        options = extract_quality_options(PRIMARY_DOWNLOAD_RESPONSE["data"][1])

        assert options == [QualityOption(720, "https://cdn.example.com/v/c-2.mp4", is_default=True)]

    def test_direct_url_used_when_all_cdns_empty(self):
        payload = {"cdnList": [{"videoPathList": []}], "url": "//cdn.example.com/direct.mp4"}

        options = extract_quality_options(payload)

        assert options == [QualityOption(720, "https://cdn.example.com/direct.mp4", is_default=True)]

    def test_direct_path_fallback(self):
        """Un chapitre ne portant que path reste lisible."""
        options = extract_quality_options({"chapterId": "c-9", "path": "//cdn.example.com/v/c-9.mp4"})

        assert options == [QualityOption(720, "https://cdn.example.com/v/c-9.mp4", is_default=True)]

    def test_no_stream_gives_empty(self):
        assert extract_quality_options(PRIMARY_DOWNLOAD_RESPONSE["data"][2]) == []
        assert extract_quality_options(None) == []
        assert extract_quality_options({"cdnList": "broken"}) == []

    def test_non_empty_list_always_has_a_default(self):
        payloads = [
            PRIMARY_DOWNLOAD_RESPONSE["data"][0],
            PRIMARY_DOWNLOAD_RESPONSE["data"][1],
            {"cdnList": [{"cdnDomain": "a", "videoPathList": [{"videoPath": ""}, {"videoPath": "/ok.mp4"}]}]},
        ]
        for payload in payloads:
            options = extract_quality_options(payload)
            assert options
            assert any(o.is_default for o in options)
