"""Public read API over Subsocial spaces, posts and profiles.

`SubsocialApi` loads structs from the chain and their content from IPFS, and
filters them by visibility:

- public: the `hidden` field on the struct is `False` and the JSON content
  was found on IPFS.
- unlisted: the `hidden` field is `True`, or there is no JSON content on IPFS.

Every plural query returns a possibly empty list; the singular variants return
`None` when nothing matches.
"""

from __future__ import annotations

from subsocial_reader.schemas.content import PostContent, ProfileContent, SpaceContent
from subsocial_reader.schemas.entity import (
    PostData,
    PostWithAllDetails,
    PostWithSomeDetails,
    ProfileData,
    SpaceData,
)
from subsocial_reader.schemas.query import (
    FindPostsWithDetailsQuery,
    FindPostWithDetailsQuery,
    FindStructsQuery,
    StructKind,
    Visibility,
)
from subsocial_reader.schemas.struct import PostStruct, ProfileStruct, SpaceStruct
from subsocial_reader.services.chain import ChainGatewayClient
from subsocial_reader.services.finder import StructFinder
from subsocial_reader.services.ipfs import build_content_store
from subsocial_reader.services.post_details import StructFinders, load_post_details
from subsocial_reader.services.sources import ContentStore, StructSource
from subsocial_reader.utils.collections import first_or_none


class SubsocialApi:
    """Find spaces, posts and profiles by id, filtered by visibility."""

    def __init__(self, struct_source: StructSource, content_store: ContentStore) -> None:
        self.struct_source = struct_source
        self.content_store = content_store
        self._spaces: StructFinder[SpaceStruct, SpaceContent, SpaceData] = StructFinder(
            StructKind.SPACE,
            struct_model=SpaceStruct,
            content_model=SpaceContent,
            entity_model=SpaceData,
            struct_source=struct_source,
            content_store=content_store,
        )
        self._posts: StructFinder[PostStruct, PostContent, PostData] = StructFinder(
            StructKind.POST,
            struct_model=PostStruct,
            content_model=PostContent,
            entity_model=PostData,
            struct_source=struct_source,
            content_store=content_store,
        )
        self._profiles: StructFinder[ProfileStruct, ProfileContent, ProfileData] = StructFinder(
            StructKind.PROFILE,
            struct_model=ProfileStruct,
            content_model=ProfileContent,
            entity_model=ProfileData,
            struct_source=struct_source,
            content_store=content_store,
        )
        self.struct_finders = StructFinders(
            find_spaces=self.find_public_spaces,
            find_posts=self._find_related_posts,
            find_profiles=self.find_profiles,
        )

    async def close(self) -> None:
        """Close collaborators that hold network resources."""
        for collaborator in (self.struct_source, self.content_store):
            close = getattr(collaborator, "close", None)
            if close is not None:
                await close()

    # Raw finders

    async def find_spaces(self, query: FindStructsQuery) -> list[SpaceData]:
        return await self._spaces.find(query)

    async def find_posts(self, query: FindStructsQuery) -> list[PostData]:
        return await self._posts.find(query)

    async def find_profiles(self, ids: list[str]) -> list[ProfileData]:
        """Find profiles by account id. Profiles cannot be hidden, so no filter applies."""
        return await self._profiles.find(FindStructsQuery(ids=ids))

    async def _find_related_posts(
        self, ids: list[str], visibility: Visibility | None
    ) -> list[PostData]:
        if visibility is not None:
            visibility = Visibility(visibility)
        return await self.find_posts(
            FindStructsQuery(
                ids=ids,
                visibility=visibility,
                with_content_only=visibility is Visibility.ONLY_PUBLIC,
            )
        )

    # Spaces

    async def find_all_spaces(self, ids: list[str]) -> list[SpaceData]:
        return await self.find_spaces(FindStructsQuery(ids=ids))

    async def find_public_spaces(self, ids: list[str]) -> list[SpaceData]:
        """Find public spaces: not hidden on chain, with content on IPFS.

        Args:
            ids: Ids of desired spaces.

        Returns:
            Spaces aggregated from the chain and IPFS. Empty if none match.
        """
        return await self.find_spaces(
            FindStructsQuery(ids=ids, visibility=Visibility.ONLY_PUBLIC, with_content_only=True)
        )

    async def find_unlisted_spaces(self, ids: list[str]) -> list[SpaceData]:
        """Find unlisted spaces: hidden on chain, or without content on IPFS.

        Args:
            ids: Ids of desired spaces.

        Returns:
            Spaces aggregated from the chain and IPFS. Empty if none match.
        """
        return await self.find_spaces(FindStructsQuery(ids=ids, visibility=Visibility.ONLY_UNLISTED))

    # Posts

    async def find_all_posts(self, ids: list[str]) -> list[PostData]:
        return await self.find_posts(FindStructsQuery(ids=ids))

    async def find_public_posts(self, ids: list[str]) -> list[PostData]:
        """Find public posts: not hidden on chain, with content on IPFS."""
        return await self.find_posts(
            FindStructsQuery(ids=ids, visibility=Visibility.ONLY_PUBLIC, with_content_only=True)
        )

    async def find_unlisted_posts(self, ids: list[str]) -> list[PostData]:
        """Find unlisted posts: hidden on chain, or without content on IPFS."""
        return await self.find_posts(FindStructsQuery(ids=ids, visibility=Visibility.ONLY_UNLISTED))

    # Posts with details

    async def find_posts_with_some_details(
        self, query: FindPostsWithDetailsQuery
    ) -> list[PostWithSomeDetails]:
        """Find posts and attach the space, owner and shared post requested in `query`."""
        posts = await self.find_posts(query.posts_query)
        return await load_post_details(posts, self.struct_finders, query.details_opts)

    async def find_public_posts_with_some_details(
        self, query: FindPostsWithDetailsQuery
    ) -> list[PostWithSomeDetails]:
        return await self.find_posts_with_some_details(query.with_visibility(Visibility.ONLY_PUBLIC))

    async def find_unlisted_posts_with_some_details(
        self, query: FindPostsWithDetailsQuery
    ) -> list[PostWithSomeDetails]:
        return await self.find_posts_with_some_details(
            query.with_visibility(Visibility.ONLY_UNLISTED)
        )

    async def find_posts_with_all_details(
        self, query: FindStructsQuery
    ) -> list[PostWithAllDetails]:
        """Find posts together with both their space and their owner."""
        details_query = FindPostsWithDetailsQuery(
            ids=query.ids,
            visibility=query.visibility,
            with_content_only=query.with_content_only,
            with_space=True,
            with_owner=True,
        )
        posts = await self.find_posts(details_query.posts_query)
        return await load_post_details(
            posts,
            self.struct_finders,
            details_query.details_opts,
            result_model=PostWithAllDetails,
        )

    async def find_public_posts_with_all_details(self, ids: list[str]) -> list[PostWithAllDetails]:
        return await self.find_posts_with_all_details(
            FindStructsQuery(ids=ids, visibility=Visibility.ONLY_PUBLIC)
        )

    async def find_unlisted_posts_with_all_details(
        self, ids: list[str]
    ) -> list[PostWithAllDetails]:
        return await self.find_posts_with_all_details(
            FindStructsQuery(ids=ids, visibility=Visibility.ONLY_UNLISTED)
        )

    # Functions that return a single element

    async def find_public_space(self, id: str) -> SpaceData | None:
        return first_or_none(await self.find_public_spaces([id]))

    async def find_unlisted_space(self, id: str) -> SpaceData | None:
        return first_or_none(await self.find_unlisted_spaces([id]))

    async def find_public_post(self, id: str) -> PostData | None:
        return first_or_none(await self.find_public_posts([id]))

    async def find_unlisted_post(self, id: str) -> PostData | None:
        return first_or_none(await self.find_unlisted_posts([id]))

    async def find_profile(self, id: str) -> ProfileData | None:
        return first_or_none(await self.find_profiles([id]))

    async def find_post_with_some_details(
        self, query: FindPostWithDetailsQuery
    ) -> PostWithSomeDetails | None:
        return first_or_none(await self.find_posts_with_some_details(query.to_many()))

    async def find_public_post_with_some_details(
        self, query: FindPostWithDetailsQuery
    ) -> PostWithSomeDetails | None:
        return first_or_none(await self.find_public_posts_with_some_details(query.to_many()))

    async def find_unlisted_post_with_some_details(
        self, query: FindPostWithDetailsQuery
    ) -> PostWithSomeDetails | None:
        return first_or_none(await self.find_unlisted_posts_with_some_details(query.to_many()))

    async def find_post_with_all_details(self, id: str) -> PostWithAllDetails | None:
        return first_or_none(await self.find_posts_with_all_details(FindStructsQuery(ids=[id])))

    async def find_public_post_with_all_details(self, id: str) -> PostWithAllDetails | None:
        return first_or_none(await self.find_public_posts_with_all_details([id]))

    async def find_unlisted_post_with_all_details(self, id: str) -> PostWithAllDetails | None:
        return first_or_none(await self.find_unlisted_posts_with_all_details([id]))


class _SubsocialApiSingleton:
    """Singleton wrapper for the application's SubsocialApi."""

    _instance: SubsocialApi | None = None

    @classmethod
    def get_instance(cls) -> SubsocialApi:
        if cls._instance is None:
            cls._instance = SubsocialApi(ChainGatewayClient(), build_content_store())
        return cls._instance

    @classmethod
    async def reset(cls) -> None:
        if cls._instance is not None:
            await cls._instance.close()
            cls._instance = None


def get_subsocial_api() -> SubsocialApi:
    """Return a singleton SubsocialApi wired to the configured gateways."""
    return _SubsocialApiSingleton.get_instance()


async def close_subsocial_api() -> None:
    """Close the singleton's HTTP clients, if it was created."""
    await _SubsocialApiSingleton.reset()
