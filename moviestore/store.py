"""
Movie Store — In-Memory Collection
===================================

What:  The ordered movie collection, its lock, and the FastAPI dependency
       that hands it to route handlers.
Why:   The collection is the only mutable state in the process; keeping it
       behind one object makes every scan-plus-mutation atomic.
How:   A list of Movie records guarded by a threading.Lock. Every public
       method takes the lock for its whole duration and returns copies, so
       no caller ever holds a reference into the shared list.
Who:   Used by MovieService; injected into routes via Depends(get_movie_store).
When:  Created and seeded at module import, i.e. once per process start.
       Nothing survives a restart.

Ordering rules:
    - insert_with_new_id appends to the end
    - replace removes the old record and appends the new one at the END,
      so an updated movie moves behind every other record
    - remove keeps the relative order of the remaining records
    - lookups scan in order; the first matching id wins when ids repeat

Why a lock in an async server:
    Handlers are coroutines today, but nothing stops a sync handler or a
    threadpool worker from reaching the store. A plain Lock costs nothing
    on the single-threaded path.
"""

from threading import Lock
from typing import Callable, List, Optional

from moviestore.exceptions import IdGenerationError
from moviestore.schemas.movie import Director, Movie


def seed_movies() -> List[Movie]:
    """The two records present at every process start."""
    return [
        Movie(
            id="1",
            isbn="123456",
            title="Movie One",
            director=Director(firstname="Lebron", lastname="James"),
        ),
        Movie(
            id="2",
            isbn="654321",
            title="Movie Two",
            director=Director(firstname="Joe", lastname="Biden"),
        ),
    ]


class MovieStore:
    """
    Ordered in-memory movie collection.

    Ids are NOT unique by construction: `insert_with_new_id` keeps the first
    draw even if it collides, unless asked to redraw until the
    id is unused, which is the only uniqueness check in the system.
    """

    def __init__(self, movies: Optional[List[Movie]] = None) -> None:
        self._movies: List[Movie] = [m.model_copy(deep=True) for m in (movies or [])]
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._movies)

    def _index_of(self, movie_id: str) -> Optional[int]:
        # Caller must hold the lock
        for i, movie in enumerate(self._movies):
            if movie.id == movie_id:
                return i
        return None

    def list(self) -> List[Movie]:
        """Snapshot of the whole collection in order."""
        with self._lock:
            return [m.model_copy(deep=True) for m in self._movies]

    def get(self, movie_id: str) -> Optional[Movie]:
        """First record whose id equals `movie_id`, or None."""
        with self._lock:
            i = self._index_of(movie_id)
            if i is None:
                return None
            return self._movies[i].model_copy(deep=True)

    def insert_with_new_id(
        self,
        movie: Movie,
        new_id: Callable[[], str],
        unique: bool = False,
        max_attempts: int = 100,
    ) -> Movie:
        """
        Assign an id drawn from `new_id` and append the movie.

        With `unique=False` the first draw is used even if it collides.
        With `unique=True` draws are repeated until the id is unused; the
        check and the append happen under the same lock acquisition.

        Raises:
            IdGenerationError: every one of `max_attempts` draws collided
        """
        with self._lock:
            candidate = new_id()
            if unique:
                attempts = 1
                while self._index_of(candidate) is not None:
                    if attempts >= max_attempts:
                        raise IdGenerationError(
                            attempts=attempts,
                            context={"collection_size": len(self._movies)},
                        )
                    candidate = new_id()
                    attempts += 1
            stored = movie.model_copy(update={"id": candidate}, deep=True)
            self._movies.append(stored)
            return stored.model_copy(deep=True)

    def replace(self, movie_id: str, movie: Movie) -> Optional[Movie]:
        """
        Remove the first record with `movie_id` and append `movie` under that id.

        Returns the stored record, or None (and no mutation) if the id is absent.
        """
        with self._lock:
            i = self._index_of(movie_id)
            if i is None:
                return None
            del self._movies[i]
            stored = movie.model_copy(update={"id": movie_id}, deep=True)
            self._movies.append(stored)
            return stored.model_copy(deep=True)

    def remove(self, movie_id: str) -> bool:
        """Remove the first record with `movie_id`. Returns whether one was removed."""
        with self._lock:
            i = self._index_of(movie_id)
            if i is None:
                return False
            del self._movies[i]
            return True

    def reset(self, movies: Optional[List[Movie]] = None) -> None:
        """Replace the whole collection, reseeding when `movies` is None."""
        fresh = seed_movies() if movies is None else [m.model_copy(deep=True) for m in movies]
        with self._lock:
            self._movies = fresh


# ── Process-wide Store ────────────────────────────────────────────────────
movie_store = MovieStore(seed_movies())


# ── Store Dependency ──────────────────────────────────────────────────────
def get_movie_store() -> MovieStore:
    """
    FastAPI dependency that provides the movie collection.

    Example usage in a route:
        @router.get("/movies")
        async def list_movies(store: MovieStore = Depends(get_movie_store)):
            return store.list()

    Tests swap in an isolated store with app.dependency_overrides.
    """
    return movie_store
