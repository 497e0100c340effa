"""Knowledge-graph client."""

from source_client.graph.client import DEATH_DATE_PROP, GraphClient, build_death_date_query
from source_client.graph.schemas import DeathDateBinding, SparqlResponse

__all__ = [
    "GraphClient",
    "DEATH_DATE_PROP",
    "build_death_date_query",
    "DeathDateBinding",
    "SparqlResponse",
]
