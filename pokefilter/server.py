from typing import Annotated, Iterator

from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from pokefilter import __version__
from pokefilter.core.filter_engine import FilterEngine
from pokefilter.core.filters import FilterCriteria, FilterOptions
from pokefilter.core.pokemon import Pokemon
from pokefilter.data.database import DataAccessError, DatabaseInfo, db

app = FastAPI(title="pokefilter Catalog API", version=__version__)

# --- Models ---


class FilterResult(BaseModel):
    total: int
    offset: int
    limit: int | None = None
    results: list[Pokemon]


class CountResult(BaseModel):
    count: int


# --- Dependencies ---


def _get_engine() -> Iterator[FilterEngine]:
    yield FilterEngine(db)


EngineDep = Annotated[FilterEngine, Depends(_get_engine)]


@app.exception_handler(DataAccessError)
async def data_access_error_handler(request: Request, exc: DataAccessError):
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": f"Catalog unavailable: {exc}"},
    )


# --- Endpoints ---


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/pokemon/filter", response_model=FilterResult)
def filter_pokemon(
    engine: EngineDep,
    criteria: FilterCriteria | None = None,
    offset: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int | None, Query(ge=1, le=1025)] = None,
):
    results = engine.filter_pokemon(criteria or FilterCriteria())
    end = offset + limit if limit is not None else None
    return FilterResult(total=len(results), offset=offset, limit=limit, results=results[offset:end])


@app.post("/pokemon/count", response_model=CountResult)
def count_pokemon(engine: EngineDep, criteria: FilterCriteria | None = None):
    return CountResult(count=engine.count_pokemon(criteria or FilterCriteria()))


@app.get("/pokemon/filter-options", response_model=FilterOptions)
def filter_options(engine: EngineDep):
    return engine.available_filter_options()


@app.get("/pokemon/search", response_model=list[Pokemon])
def search_pokemon(
    engine: EngineDep,
    q: Annotated[str, Query(min_length=1)],
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
):
    return engine.search_pokemon(q, limit=limit)


@app.get("/pokemon/{pokemon_id}", response_model=Pokemon)
def get_pokemon(pokemon_id: int, engine: EngineDep):
    pokemon = engine.get_pokemon(pokemon_id)
    if pokemon is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Pokemon #{pokemon_id} not found")
    return pokemon


@app.get("/catalog/info", response_model=DatabaseInfo)
def catalog_info(engine: EngineDep):
    return engine.database.get_info()
