# =============================================================================
# core/services/catalog_service.py - Catalog Data Access
# =============================================================================
# Thin pass-through to the songs, albums and users tables.
# Separates HTTP concerns from database access; no catalog rules live here.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import AlbumNotFoundError, SongNotFoundError
from core.models.catalog import Album, Song, SongCreate, Stats, UserProfile
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

SONGS_TABLE = "songs"
ALBUMS_TABLE = "albums"
USERS_TABLE = "users"


def _query_failed(action: str, error: Exception) -> SupabaseClientError:
    logger.error(f"Failed to {action}: {error}")
    return SupabaseClientError(
        message=f"Failed to {action}: {error}",
        code="QUERY_FAILED",
        suggestion="Check the database connection and table permissions",
    )


class CatalogService:
    """
    Service for catalog reads and admin writes.

    Provides a clean interface between API routes and database.
    """

    # -------------------------------------------------------------------------
    # Songs
    # -------------------------------------------------------------------------

    @staticmethod
    def list_songs() -> list[Song]:
        """Return every song, newest first."""
        client = SupabaseClient.get_client()
        try:
            response = (
                client.table(SONGS_TABLE)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            raise _query_failed("list songs", e)

        return [Song(**row) for row in response.data or []]

    @staticmethod
    def get_song(song_id: str | UUID) -> Song:
        """
        Get a song by ID.

        Raises:
            SongNotFoundError: If the song doesn't exist
        """
        song_id_str = str(song_id)
        client = SupabaseClient.get_client()
        try:
            response = (
                client.table(SONGS_TABLE)
                .select("*")
                .eq("id", song_id_str)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise _query_failed("fetch song", e)

        if not response.data:
            raise SongNotFoundError(song_id_str)
        return Song(**response.data[0])

    @staticmethod
    def create_song(song: SongCreate, audio_url: str, image_url: str) -> Song:
        """Insert a song whose media is already in storage."""
        client = SupabaseClient.get_client()
        data: dict[str, Any] = {
            **song.model_dump(),
            "audio_url": audio_url,
            "image_url": image_url,
        }
        try:
            response = client.table(SONGS_TABLE).insert(data).execute()
        except Exception as e:
            raise _query_failed("create song", e)

        if not response.data:
            raise SupabaseClientError("Insert returned no data", code="QUERY_FAILED")

        created = Song(**response.data[0])
        logger.info(f"Created song: {created.id} ({created.title})")
        return created

    @staticmethod
    def delete_song(song_id: str | UUID) -> None:
        """
        Delete a song.

        Raises:
            SongNotFoundError: If the song doesn't exist
        """
        song_id_str = str(song_id)
        client = SupabaseClient.get_client()
        try:
            response = client.table(SONGS_TABLE).delete().eq("id", song_id_str).execute()
        except Exception as e:
            raise _query_failed("delete song", e)

        if not response.data:
            raise SongNotFoundError(song_id_str)
        logger.info(f"Deleted song: {song_id_str}")

    # -------------------------------------------------------------------------
    # Albums
    # -------------------------------------------------------------------------

    @staticmethod
    def list_albums() -> list[Album]:
        client = SupabaseClient.get_client()
        try:
            response = client.table(ALBUMS_TABLE).select("*").execute()
        except Exception as e:
            raise _query_failed("list albums", e)

        return [Album(**row) for row in response.data or []]

    @staticmethod
    def get_album(album_id: str | UUID) -> Album:
        """
        Get an album together with its songs.

        Raises:
            AlbumNotFoundError: If the album doesn't exist
        """
        album_id_str = str(album_id)
        client = SupabaseClient.get_client()
        try:
            album_response = (
                client.table(ALBUMS_TABLE)
                .select("*")
                .eq("id", album_id_str)
                .limit(1)
                .execute()
            )
            if not album_response.data:
                raise AlbumNotFoundError(album_id_str)

            songs_response = (
                client.table(SONGS_TABLE)
                .select("*")
                .eq("album_id", album_id_str)
                .execute()
            )
        except AlbumNotFoundError:
            raise
        except Exception as e:
            raise _query_failed("fetch album", e)

        songs = [Song(**row) for row in songs_response.data or []]
        return Album(**album_response.data[0], songs=songs)

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    @staticmethod
    def list_users(exclude_id: str | UUID | None = None) -> list[UserProfile]:
        """Return all user profiles, optionally leaving out the caller."""
        client = SupabaseClient.get_client()
        try:
            query = client.table(USERS_TABLE).select("*")
            if exclude_id is not None:
                query = query.neq("id", str(exclude_id))
            response = query.execute()
        except Exception as e:
            raise _query_failed("list users", e)

        return [UserProfile(**row) for row in response.data or []]

    @staticmethod
    def upsert_user(profile: UserProfile) -> UserProfile:
        """Create the profile row for a user on first sign-in, or refresh it."""
        client = SupabaseClient.get_client()
        data = profile.model_dump(exclude_none=True)
        try:
            response = client.table(USERS_TABLE).upsert(data).execute()
        except Exception as e:
            raise _query_failed("upsert user", e)

        if response.data:
            return UserProfile(**response.data[0])
        return profile

    # -------------------------------------------------------------------------
    # Stats
    # -------------------------------------------------------------------------

    @staticmethod
    def get_stats() -> Stats:
        client = SupabaseClient.get_client()
        try:
            songs = client.table(SONGS_TABLE).select("id", count="exact").execute()
            albums = client.table(ALBUMS_TABLE).select("id", count="exact").execute()
            users = client.table(USERS_TABLE).select("id", count="exact").execute()
            artists = client.table(SONGS_TABLE).select("artist").execute()
        except Exception as e:
            raise _query_failed("compute stats", e)

        unique_artists = {row.get("artist") for row in artists.data or [] if row.get("artist")}
        return Stats(
            total_songs=songs.count or 0,
            total_albums=albums.count or 0,
            total_users=users.count or 0,
            total_artists=len(unique_artists),
        )
