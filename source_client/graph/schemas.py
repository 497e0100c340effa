"""Knowledge-graph (SPARQL JSON results) schemas."""

from datetime import date

from pydantic import BaseModel, Field

ENTITY_PREFIX = "http://www.wikidata.org/entity/"


class BindingValue(BaseModel):
    """One RDF term in a result row."""

    type: str = "literal"
    value: str


class DeathDateBinding(BaseModel):
    """Result row of the death-date query."""

    person: BindingValue
    death_date: BindingValue = Field(alias="deathDate")

    class Config:
        populate_by_name = True

    @property
    def entity_id(self) -> str:
        return self.person.value.removeprefix(ENTITY_PREFIX)

    @property
    def parsed_date(self) -> date | None:
        """Calendar date of the literal, None for unknown or unparsable values."""
        try:
            return date.fromisoformat(self.death_date.value[:10])
        except ValueError:
            return None


class SparqlResults(BaseModel):
    bindings: list[dict] = []


class SparqlResponse(BaseModel):
    """SPARQL 1.1 JSON results document."""

    results: SparqlResults = SparqlResults()
