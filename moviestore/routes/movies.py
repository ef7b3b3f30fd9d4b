"""
Movie Store — Movie Route Handlers
===================================

What:  The five movie endpoints: list, get, create, update, delete.
How:   Extracts the path id and raw body, delegates to MovieService,
       returns JSON.

Route Table:
    GET    /movies        → list_movies
    GET    /movies/{id}   → get_movie
    POST   /movies        → create_movie
    PUT    /movies/{id}   → update_movie
    DELETE /movies/{id}   → delete_movie

Empty Responses:
    A miss on GET/PUT and every DELETE answer 200 with no body but still
    carry Content-Type: application/json. Callers cannot tell a deleted
    movie from one that never existed.

Why raw bodies (not a Pydantic body parameter):
    FastAPI would answer a malformed body with 422 before the handler runs.
    Reading the bytes ourselves lets the service absorb it instead.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response

from moviestore.schemas.movie import ErrorResponse, Movie
from moviestore.services.movie_service import movie_service
from moviestore.store import MovieStore, get_movie_store

JSON_MEDIA_TYPE = "application/json"

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(tags=["Movies"])


def _empty_response() -> Response:
    return Response(status_code=200, media_type=JSON_MEDIA_TYPE)


@router.get(
    "/movies",
    response_model=List[Movie],
    summary="List all movies",
    description="Returns the whole collection in order. No filtering, no pagination.",
)
async def list_movies(store: MovieStore = Depends(get_movie_store)):
    return movie_service.list_movies(store)


@router.get(
    "/movies/{movie_id}",
    response_model=Movie,
    responses={
        200: {"description": "The movie, or an empty body if the ID is unknown"},
        404: {"description": "Unknown ID (strict not-found mode only)", "model": ErrorResponse},
    },
    summary="Get a single movie by ID",
)
async def get_movie(movie_id: str, store: MovieStore = Depends(get_movie_store)):
    """
    The first movie whose ID equals `movie_id`.

    An unknown ID answers 200 with an empty body unless strict not-found
    mode is on.
    """
    movie = movie_service.get_movie(store, movie_id)
    if movie is None:
        return _empty_response()
    return movie


@router.post(
    "/movies",
    response_model=Movie,
    responses={400: {"description": "Malformed body (strict body mode only)", "model": ErrorResponse}},
    summary="Create a movie",
    description="Any ID in the body is ignored; a random decimal ID is assigned.",
)
async def create_movie(request: Request, store: MovieStore = Depends(get_movie_store)):
    body = await request.body()
    return movie_service.create_movie(store, body)


@router.put(
    "/movies/{movie_id}",
    response_model=Movie,
    responses={
        200: {"description": "The replaced movie, or an empty body if the ID is unknown"},
        400: {"description": "Malformed body (strict body mode only)", "model": ErrorResponse},
        404: {"description": "Unknown ID (strict not-found mode only)", "model": ErrorResponse},
    },
    summary="Replace a movie",
    description=(
        "Replaces the movie with the given ID by the request body. The path ID wins "
        "over any ID in the body, and the replaced movie moves to the end of the list."
    ),
)
async def update_movie(
    movie_id: str,
    request: Request,
    store: MovieStore = Depends(get_movie_store),
):
    body = await request.body()
    movie = movie_service.update_movie(store, movie_id, body)
    if movie is None:
        return _empty_response()
    return movie


@router.delete(
    "/movies/{movie_id}",
    response_class=Response,
    responses={200: {"description": "Always empty, whether or not the ID existed"}},
    summary="Delete a movie",
)
async def delete_movie(movie_id: str, store: MovieStore = Depends(get_movie_store)) -> Response:
    movie_service.delete_movie(store, movie_id)
    return _empty_response()
