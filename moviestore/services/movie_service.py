"""
Movie Store — Movie Service (Business Logic)
=============================================

What:  The rules behind the five movie routes: id generation, best-effort
       body decoding and the not-found policy.
Why:   Keeps routes thin and lets the rules be tested without HTTP.
How:   Stateless methods that receive the MovieStore for each call.
Who:   Called by route handlers in routes/movies.py.

Body Decoding (decode_movie):
    Request bodies are decoded best-effort rather than validated:

    ┌─────────────────────────────┬──────────────────────────────────────┐
    │ Input                       │ Result                               │
    ├─────────────────────────────┼──────────────────────────────────────┤
    │ not JSON / empty / not {}   │ zero-valued Movie                    │
    │ nested too deep to parse    │ zero-valued Movie                    │
    │ {"title":"x"} trailing junk │ first value decoded, rest ignored    │
    │ "Title" instead of "title"  │ matched case-insensitively           │
    │ "title" and "Title" both    │ the later key in the document wins   │
    │ unknown keys                │ ignored                              │
    │ "title": 42                 │ ignored, other fields decoded        │
    │ "title": null               │ ignored                              │
    │ "director": null / missing  │ director None                        │
    └─────────────────────────────┴──────────────────────────────────────┘

    A repeated "director" object fills in the same director, so
    {"director":{"firstname":"A"},"Director":{"lastname":"B"}} yields A B.

    With settings.strict_body enabled, malformed JSON, a non-object body and
    wrong-typed fields raise ValidationError (400). Case-folding, unknown
    keys, nulls and trailing data are accepted in both modes.

Not-Found Policy:
    GET and PUT on an unknown id return None, which the routes answer with
    an empty 200. With settings.strict_not_found enabled they raise
    NotFoundError (404) instead. DELETE never distinguishes the two cases.
"""

import json
import logging
import random
from typing import Any, Callable, List, Optional

from moviestore.config import settings
from moviestore.exceptions import NotFoundError, ValidationError
from moviestore.schemas.movie import Director, Movie
from moviestore.store import MovieStore

logger = logging.getLogger(__name__)

# Generated ids are uniform in [0, ID_SPACE)
ID_SPACE = 1_000_000

_JSON_WHITESPACE = " \t\n\r"


def generate_movie_id() -> str:
    """Draw a random id and render it as a decimal string."""
    return str(random.randrange(ID_SPACE))


class _JSONObject(list):
    """(key, value) pairs of one JSON object, in document order, duplicates kept."""


# Objects keep every key so that later keys can override earlier ones
_decoder = json.JSONDecoder(object_pairs_hook=_JSONObject)


def _matches(obj: _JSONObject, name: str) -> List[Any]:
    """Values of every key that case-folds to `name`, in document order."""
    return [value for key, value in obj if key.casefold() == name]


class MovieService:
    """
    Business logic layer for movie operations.

    Responsibilities:
        - list_movies(): whole collection in order
        - get_movie(): first match by id, with the not-found policy
        - create_movie(): decode, draw a fresh id, append
        - update_movie(): decode, force the path id, move to the end
        - delete_movie(): remove the first match, silently
    """

    def __init__(self, id_factory: Optional[Callable[[], str]] = None):
        self._new_id = id_factory or generate_movie_id

    # ── Decoding ──────────────────────────────────────────────────────────

    def decode_movie(self, body: bytes) -> Movie:
        """
        Decode a request body into a Movie, absorbing what cannot be decoded.

        Only the first JSON value of the body is read; anything after it is
        ignored. Invalid UTF-8 is replaced with U+FFFD before parsing.

        Args:
            body: Raw request body bytes

        Returns:
            The decoded Movie; its `id` is whatever the body carried and is
            overwritten by the caller.

        Raises:
            ValidationError: body is malformed and settings.strict_body is on
        """
        text = body.decode("utf-8", errors="replace").lstrip(_JSON_WHITESPACE)
        try:
            data, _ = _decoder.raw_decode(text)
        except (ValueError, RecursionError):
            # RecursionError: nesting deeper than the parser can follow
            self._reject("Request body is not valid JSON")
            return Movie()

        if not isinstance(data, _JSONObject):
            self._reject("Request body must be a JSON object")
            return Movie()

        fields = {
            name: self._decode_string(data, name)
            for name in ("id", "isbn", "title")
        }
        return Movie(**fields, director=self._decode_director(data))

    def _decode_string(self, obj: _JSONObject, name: str, current: str = "", prefix: str = "") -> str:
        for value in _matches(obj, name):
            if value is None:
                continue
            if not isinstance(value, str):
                self._reject(f"Field '{prefix}{name}' must be a string", field=prefix + name)
                continue
            current = value
        return current

    def _decode_director(self, obj: _JSONObject) -> Optional[Director]:
        director: Optional[Director] = None
        for value in _matches(obj, "director"):
            if value is None:
                director = None
            elif isinstance(value, _JSONObject):
                if director is None:
                    director = Director()
                director = Director(
                    firstname=self._decode_string(
                        value, "firstname", current=director.firstname, prefix="director."
                    ),
                    lastname=self._decode_string(
                        value, "lastname", current=director.lastname, prefix="director."
                    ),
                )
            else:
                self._reject("Field 'director' must be an object or null", field="director")
        return director

    def _reject(self, message: str, field: Optional[str] = None) -> None:
        if settings.strict_body:
            raise ValidationError(message=message, field=field)
        logger.debug("Absorbed malformed movie body: %s", message)

    def _missing(self, movie_id: str) -> None:
        if settings.strict_not_found:
            raise NotFoundError(resource="movie", resource_id=movie_id)
        logger.debug("Movie %s not found", movie_id)

    # ── Operations ────────────────────────────────────────────────────────

    def list_movies(self, store: MovieStore) -> List[Movie]:
        return store.list()

    def get_movie(self, store: MovieStore, movie_id: str) -> Optional[Movie]:
        """
        First movie whose id equals `movie_id`.

        Returns:
            The movie, or None when absent (default policy)

        Raises:
            NotFoundError: absent and settings.strict_not_found is on
        """
        movie = store.get(movie_id)
        if movie is None:
            self._missing(movie_id)
        return movie

    def create_movie(self, store: MovieStore, body: bytes) -> Movie:
        """
        Decode `body` and append it under a freshly drawn id.

        Any id in the body is discarded. Draws are collision-checked only
        when settings.unique_ids is on.

        Raises:
            ValidationError: malformed body in strict body mode
            IdGenerationError: no unused id found in strict id mode
        """
        movie = self.decode_movie(body)
        created = store.insert_with_new_id(
            movie,
            new_id=self._new_id,
            unique=settings.unique_ids,
            max_attempts=settings.id_max_attempts,
        )
        logger.info("Movie %s created: %r", created.id, created.title)
        return created

    def update_movie(self, store: MovieStore, movie_id: str, body: bytes) -> Optional[Movie]:
        """
        Replace the first movie with `movie_id` by the decoded body.

        The stored record keeps `movie_id` whatever the body says and moves
        to the end of the collection.

        Returns:
            The stored movie, or None (no mutation) when absent

        Raises:
            ValidationError: malformed body in strict body mode
            NotFoundError: absent and settings.strict_not_found is on
        """
        movie = self.decode_movie(body)
        updated = store.replace(movie_id, movie)
        if updated is None:
            self._missing(movie_id)
            return None
        logger.info("Movie %s updated", movie_id)
        return updated

    def delete_movie(self, store: MovieStore, movie_id: str) -> bool:
        """Remove the first movie with `movie_id`; absent ids are a no-op."""
        removed = store.remove(movie_id)
        if removed:
            logger.info("Movie %s deleted", movie_id)
        else:
            logger.debug("Delete of absent movie %s ignored", movie_id)
        return removed


# ── Singleton Instance ────────────────────────────────────────────────────
movie_service = MovieService()
