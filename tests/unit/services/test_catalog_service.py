"""
Tests du service catalogue (passerelle reelle, httpx simule par respx).

Tests couvrant:
- forme des appels selon le fournisseur (DOWNLOAD / ACTION)
- normalisation des listes, fiches, episodes et flux
- absorption des echecs amont (listes vides, fiche par defaut)
"""

import httpx
import pytest
import pytest_asyncio
import respx

from dracin.adapters.api.gateway import UpstreamGateway
from dracin.core.entities import DramaStatus
from dracin.core.value_objects import ProviderTable
from dracin.services.catalog import CatalogService, locate_chapter, split_download_payload
from tests.fixtures.upstream_responses import (
    PRIMARY_CATEGORIES_RESPONSE,
    PRIMARY_DOWNLOAD_RESPONSE,
    PRIMARY_HOME_RESPONSE,
    PRIMARY_SEARCH_RESPONSE,
    PRIMARY_URL,
    PRIMARY_VIP_RESPONSE,
    SECONDARY_CHAPTERS_RESPONSE,
    SECONDARY_DETAIL_RESPONSE,
    SECONDARY_FAILURE_RESPONSE,
    SECONDARY_HOME_RESPONSE,
    SECONDARY_STREAM_RESPONSE,
    SECONDARY_URL,
    SECONDARY_VIP_RESPONSE,
)

BOOK_ID = "41000102345"


@pytest_asyncio.fixture
async def catalog(gateway: UpstreamGateway, provider_table: ProviderTable):
    service = CatalogService(gateway=gateway, providers=provider_table, page_size=20)
    yield service
    await gateway.close()


def _params(route) -> dict:
    return dict(route.calls.last.request.url.params)


class TestPayloadHelpers:
    """Tests des fonctions de decoupage des reponses."""

    def test_split_download_payload(self):
        chapters, info = split_download_payload(PRIMARY_DOWNLOAD_RESPONSE)

        assert len(chapters) == 3
        assert info["bookId"] == BOOK_ID

    def test_split_bare_list(self):
        assert split_download_payload([{"chapterId": "a"}]) == ([{"chapterId": "a"}], {})

    def test_split_drama_carrying_chapters(self):
        chapters, info = split_download_payload({"bookId": "1", "chapterList": [{}]})

        assert chapters == [{}]
        assert info["bookId"] == "1"

    def test_split_unusable(self):
        assert split_download_payload(None) == ([], {})

    def test_locate_by_declared_index_then_position(self):
        chapters = [{"chapterIndex": 0}, {"chapterIndex": 1}, {"chapterId": "x"}]

        assert locate_chapter(chapters, episode=1) == (1, chapters[1])
        assert locate_chapter(chapters, episode=3) == (2, chapters[2])
        assert locate_chapter(chapters, episode=7) is None

    def test_locate_by_chapter_id(self):
        chapters = [{"chapterId": 10}, {"chapterId": "11"}]

        assert locate_chapter(chapters, chapter_id="10") == (0, chapters[0])
        assert locate_chapter(chapters, chapter_id="99") is None


class TestPrimaryProvider:
    """Fournisseur DOWNLOAD (primary)."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_home(self, catalog: CatalogService):
        route = respx.get(f"{PRIMARY_URL}/home").mock(
            return_value=httpx.Response(200, json=PRIMARY_HOME_RESPONSE)
        )

        dramas = await catalog.get_home(page=2)

        assert [d.book_id for d in dramas] == [BOOK_ID, "41000107777"]
        assert _params(route) == {"page": "2"}

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_uses_keyword(self, catalog: CatalogService):
        route = respx.get(f"{PRIMARY_URL}/search").mock(
            return_value=httpx.Response(200, json=PRIMARY_SEARCH_RESPONSE)
        )

        dramas = await catalog.search("ceo")

        assert _params(route) == {"keyword": "ceo"}
        assert dramas[0].book_id == "12"
        assert dramas[0].year == 2023

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_vip_book_list(self, catalog: CatalogService):
        respx.get(f"{PRIMARY_URL}/vip").mock(return_value=httpx.Response(200, json=PRIMARY_VIP_RESPONSE))

        dramas = await catalog.get_vip()

        assert [d.book_name for d in dramas] == ["VIP Drama"]
        assert dramas[0].rating == 10.0

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_categories(self, catalog: CatalogService):
        respx.get(f"{PRIMARY_URL}/categories").mock(
            return_value=httpx.Response(200, json=PRIMARY_CATEGORIES_RESPONSE)
        )

        categories = await catalog.get_categories()

        assert [c.id for c in categories] == [1, 2]

    @pytest.mark.asyncio
    @respx.mock
    async def test_numeric_category_type(self, catalog: CatalogService):
        route = respx.get(f"{PRIMARY_URL}/categories").mock(
            return_value=httpx.Response(200, json=PRIMARY_HOME_RESPONSE)
        )

        dramas = await catalog.get_dramas_by_category("12", page=3)

        assert len(dramas) == 2
        assert _params(route) == {"categoryId": "12", "page": "3"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "category_type, endpoint",
        [
            ("trending", "home"),
            ("latest", "home"),
            ("dubindo", "home"),
            ("foryou", "recommend"),
            ("populersearch", "recommend"),
            ("vip", "vip"),
            ("whatever", "home"),
            # Chiffres non decimaux : alias inconnu, pas une categorie
            ("²", "home"),
            ("①", "home"),
        ],
    )
    async def test_category_aliases(self, catalog: CatalogService, category_type, endpoint):
        with respx.mock:
            route = respx.get(f"{PRIMARY_URL}/{endpoint}").mock(
                return_value=httpx.Response(200, json=PRIMARY_HOME_RESPONSE)
            )

            await catalog.get_dramas_by_category(category_type)

        assert route.called

    @pytest.mark.asyncio
    @respx.mock
    async def test_detail_uses_chapter_list_length(self, catalog: CatalogService):
        respx.get(f"{PRIMARY_URL}/download/{BOOK_ID}").mock(
            return_value=httpx.Response(200, json=PRIMARY_DOWNLOAD_RESPONSE)
        )

        drama = await catalog.get_drama_detail(BOOK_ID)

        assert drama.book_name == "Cinta Sang CEO"
        assert drama.chapter_count == 3
        assert drama.latest_episode == 3
        assert drama.status is DramaStatus.COMPLETED

    @pytest.mark.asyncio
    @respx.mock
    async def test_all_episodes(self, catalog: CatalogService):
        respx.get(f"{PRIMARY_URL}/download/{BOOK_ID}").mock(
            return_value=httpx.Response(200, json=PRIMARY_DOWNLOAD_RESPONSE)
        )

        episodes = await catalog.get_all_episodes(BOOK_ID)

        assert [e.chapter_id for e in episodes] == ["c-1", "c-2", "c-3"]
        assert [e.chapter_name for e in episodes] == ["Pertemuan", "Episode 2", "Episode 3"]
        assert not any(e.is_resolved for e in episodes)

    @pytest.mark.asyncio
    @respx.mock
    async def test_episodes_synthesized_from_chapter_count(self, catalog: CatalogService):
        respx.get(f"{PRIMARY_URL}/download/{BOOK_ID}").mock(
            return_value=httpx.Response(200, json={"info": {"bookId": BOOK_ID, "chapterCount": 5}, "data": []})
        )

        episodes = await catalog.get_all_episodes(BOOK_ID)

        assert [e.chapter_index for e in episodes] == [1, 2, 3, 4, 5]
        assert episodes[-1].chapter_name == "Episode 5"

    @pytest.mark.asyncio
    @respx.mock
    async def test_stream_by_episode_number(self, catalog: CatalogService):
        respx.get(f"{PRIMARY_URL}/download/{BOOK_ID}").mock(
            return_value=httpx.Response(200, json=PRIMARY_DOWNLOAD_RESPONSE)
        )

        options = await catalog.get_stream(BOOK_ID, episode=1)

        assert [o.quality for o in options] == [720, 1080, 480]

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_episode_completes_listing_entry(self, catalog: CatalogService):
        respx.get(f"{PRIMARY_URL}/download/{BOOK_ID}").mock(
            return_value=httpx.Response(200, json=PRIMARY_DOWNLOAD_RESPONSE)
        )

        episode = await catalog.get_episode(BOOK_ID, episode=2)

        assert episode.chapter_id == "c-2"
        assert episode.video_url == "https://cdn.example.com/v/c-2.mp4"
        assert episode.to_dict()["qualityOptions"][0]["isDefault"] is True

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_episode(self, catalog: CatalogService):
        respx.get(f"{PRIMARY_URL}/download/{BOOK_ID}").mock(
            return_value=httpx.Response(200, json=PRIMARY_DOWNLOAD_RESPONSE)
        )

        assert await catalog.get_episode(BOOK_ID, episode=9) is None
        assert await catalog.get_stream(BOOK_ID, episode=3) == []


class TestSecondaryProvider:
    """Fournisseur ACTION (secondary) : action=<nom>, size, {success, data}."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_home_sends_action_and_size(self, catalog: CatalogService):
        route = respx.get(f"{SECONDARY_URL}/home").mock(
            return_value=httpx.Response(200, json=SECONDARY_HOME_RESPONSE)
        )

        dramas = await catalog.get_home(provider="secondary")

        assert _params(route) == {"action": "home", "page": "1", "size": "20"}
        assert dramas[0].status is DramaStatus.ONGOING

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_uses_query(self, catalog: CatalogService):
        route = respx.get(f"{SECONDARY_URL}/search").mock(
            return_value=httpx.Response(200, json=SECONDARY_HOME_RESPONSE)
        )

        await catalog.search("ceo", page=2, provider="secondary")

        assert _params(route) == {"action": "search", "query": "ceo", "page": "2", "size": "20"}

    @pytest.mark.asyncio
    @respx.mock
    async def test_vip_book_list_inside_data(self, catalog: CatalogService):
        respx.get(f"{SECONDARY_URL}/vip").mock(return_value=httpx.Response(200, json=SECONDARY_VIP_RESPONSE))

        dramas = await catalog.get_vip(provider="secondary")

        assert [d.book_id for d in dramas] == ["s-vip"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_category_endpoint(self, catalog: CatalogService):
        route = respx.get(f"{SECONDARY_URL}/category").mock(
            return_value=httpx.Response(200, json=SECONDARY_HOME_RESPONSE)
        )

        await catalog.get_category(7, provider="secondary")

        assert _params(route)["categoryId"] == "7"

    @pytest.mark.asyncio
    @respx.mock
    async def test_detail(self, catalog: CatalogService):
        route = respx.get(f"{SECONDARY_URL}/detail").mock(
            return_value=httpx.Response(200, json=SECONDARY_DETAIL_RESPONSE)
        )

        drama = await catalog.get_drama_detail("s-1", provider="secondary")

        assert _params(route) == {"action": "detail", "bookId": "s-1"}
        assert drama.book_name == "Secondary One"
        assert drama.chapter_count == 3

    @pytest.mark.asyncio
    @respx.mock
    async def test_unsuccessful_response_gives_default_record(self, catalog: CatalogService):
        respx.get(f"{SECONDARY_URL}/detail").mock(
            return_value=httpx.Response(200, json=SECONDARY_FAILURE_RESPONSE)
        )

        drama = await catalog.get_drama_detail("s-404", provider="secondary")

        assert drama.book_id == "s-404"
        assert drama.book_name == "Unknown"

    @pytest.mark.asyncio
    @respx.mock
    async def test_chapters(self, catalog: CatalogService):
        respx.get(f"{SECONDARY_URL}/chapters").mock(
            return_value=httpx.Response(200, json=SECONDARY_CHAPTERS_RESPONSE)
        )

        episodes = await catalog.get_all_episodes("s-1", provider="secondary")

        # Index 0-based de l'amont conserve
        assert [e.chapter_index for e in episodes] == [0, 1]
        assert [e.chapter_name for e in episodes] == ["Awal", "Episode 2"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_stream_by_chapter_id(self, catalog: CatalogService):
        route = respx.get(f"{SECONDARY_URL}/stream").mock(
            return_value=httpx.Response(200, json=SECONDARY_STREAM_RESPONSE)
        )

        episode = await catalog.get_episode("s-1", episode=2, chapter_id="sc-1", provider="secondary")

        assert _params(route) == {"action": "stream", "bookId": "s-1", "chapterId": "sc-1"}
        assert episode.chapter_id == "sc-1"
        assert episode.chapter_name == "Episode Dua"
        assert [o.quality for o in episode.quality_options] == [1080, 540]
        assert episode.video_url == "https://stream.example.com/s/sc-1-540.m3u8"

    @pytest.mark.asyncio
    @respx.mock
    async def test_stream_keeps_requested_chapter_id(self, catalog: CatalogService):
        """Un chapterId nul ou different dans la reponse ne remplace pas celui demande."""
        payload = {"success": True, "data": {"chapterId": None, "id": "other", "videoUrl": "//s.example.com/1.m3u8"}}
        respx.get(f"{SECONDARY_URL}/stream").mock(return_value=httpx.Response(200, json=payload))

        episode = await catalog.get_episode("s-1", episode=1, chapter_id="sc-1", provider="secondary")

        assert episode.chapter_id == "sc-1"
        assert episode.video_url == "https://s.example.com/1.m3u8"

    @pytest.mark.asyncio
    @respx.mock
    async def test_stream_without_chapter_id_makes_no_call(self, catalog: CatalogService):
        route = respx.get(f"{SECONDARY_URL}/stream")

        assert await catalog.get_stream("s-1", episode=1, provider="secondary") == []
        assert not route.called


class TestFailureAbsorption:
    """Les echecs amont ne levent jamais depuis le service."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_error_gives_empty_list(self, catalog: CatalogService):
        respx.get(f"{PRIMARY_URL}/home").mock(return_value=httpx.Response(500, json={"error": "boom"}))

        assert await catalog.get_home() == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error_gives_empty_list(self, catalog: CatalogService):
        respx.get(f"{PRIMARY_URL}/search").mock(side_effect=httpx.ConnectError("down"))

        assert await catalog.search("ceo") == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_detail_failure_gives_default_drama(self, catalog: CatalogService):
        respx.get(f"{PRIMARY_URL}/download/{BOOK_ID}").mock(side_effect=httpx.ReadTimeout("slow"))

        drama = await catalog.get_drama_detail(BOOK_ID)

        assert drama.to_dict() == {
            "bookId": BOOK_ID,
            "bookName": "Unknown",
            "cover": "",
            "introduction": "",
            "rating": 0.0,
            "genres": [],
            "status": "Completed",
            "year": 0,
            "latestEpisode": 0,
        }

    @pytest.mark.asyncio
    @respx.mock
    async def test_unknown_provider_uses_default(self, catalog: CatalogService):
        route = respx.get(f"{PRIMARY_URL}/home").mock(
            return_value=httpx.Response(200, json=PRIMARY_HOME_RESPONSE)
        )

        await catalog.get_home(provider="tertiary")

        assert route.called
