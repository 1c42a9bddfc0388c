"""RDF relationship store backed by an rdflib Graph.

Entities are URIs of the form info:fedora/<id>. Membership edges use the
RELS-EXT predicates; display metadata uses the Fedora model and view
vocabularies:

    <info:fedora/ns:1> rels:isMemberOfCollection <info:fedora/ns:root> ;
                       fedora-model:label "Page one" ;
                       fedora-model:ownerId "admin" ;
                       fedora-view:lastModifiedDate "2025-01-02T03:04:05Z" .

The Graph may be any rdflib store, including a remote SPARQL endpoint.
Failures raised by the graph surface as StoreError.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from rdflib import Graph, Literal, Namespace, URIRef

from ..exceptions import StoreError
from ..utils import pid
from .base import CONTEXT_MANAGE, CONTEXT_VIEW, RelationshipStore
from .edge import RELS_EXT, Edge, Predicate
from .entity import Entity

logger = logging.getLogger(__name__)

RELS = Namespace(RELS_EXT)
FEDORA_MODEL = Namespace("info:fedora/fedora-system:def/model#")
FEDORA_VIEW = Namespace("info:fedora/fedora-system:def/view#")

INIT_NS = {
    "rels": RELS,
    "fedora-model": FEDORA_MODEL,
    "fedora-view": FEDORA_VIEW,
}

# Entity attribute -> metadata predicate
ENTITY_FIELDS = {
    "label": FEDORA_MODEL.label,
    "owner": FEDORA_MODEL.ownerId,
    "last_modified": FEDORA_VIEW.lastModifiedDate,
}

MEMBER_PATTERN = """
    { ?object rels:isMemberOfCollection ?collection }
    UNION
    { ?object rels:isMemberOf ?collection }
"""

COUNT_QUERY = f"""
SELECT (COUNT(DISTINCT ?object) AS ?count)
WHERE {{
    {MEMBER_PATTERN}
}}
"""

# Owner and modification date are only requested in the manage context
MANAGE_FIELDS = """
    OPTIONAL { ?object fedora-model:ownerId ?o }
    OPTIONAL { ?object fedora-view:lastModifiedDate ?d }
"""


def _members_query(context: str, page: int, limit: int) -> str:
    # One row per member even when a metadata predicate has several values
    manage = context == CONTEXT_MANAGE
    variables = "?object (MIN(?t) AS ?title)"
    if manage:
        variables += " (SAMPLE(?o) AS ?owner) (SAMPLE(?d) AS ?date_modified)"
    return f"""
SELECT {variables}
WHERE {{
    {MEMBER_PATTERN}
    OPTIONAL {{ ?object fedora-model:label ?t }}
    {MANAGE_FIELDS if manage else ""}
}}
GROUP BY ?object
ORDER BY ?title ?object
LIMIT {int(limit)}
OFFSET {int(page) * int(limit)}
"""


class GraphRelationshipStore(RelationshipStore):
    """Relationship store over an rdflib Graph.

    Optionally bound to a Turtle file: loaded on construction when it
    exists, written back on a clean context exit or an explicit save().
    """

    backend = "rdf"

    def __init__(self, graph: Graph | None = None, path: str | Path | None = None):
        """Initialize the store.

        Args:
            graph: Graph to operate on. A new in-memory Graph if None.
            path: Optional Turtle file the graph is loaded from and saved to
        """
        self.graph = graph if graph is not None else Graph()
        self.path = Path(path) if path else None
        for prefix, namespace in INIT_NS.items():
            self.graph.bind(prefix, namespace)

        if self.path and self.path.exists():
            self.load(self.path)

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        """Translate graph failures into StoreError."""
        try:
            yield
        except StoreError:
            raise
        except Exception as e:
            raise StoreError(
                f"Store {operation} failed: {e}",
                backend=self.backend,
                operation=operation,
            ) from e

    def __enter__(self) -> GraphRelationshipStore:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None and self.path:
            self.save()

    # ==========================================================================
    # PERSISTENCE
    # ==========================================================================

    def load(self, path: str | Path) -> None:
        """Parse a Turtle file into the graph."""
        with self._guard("load"):
            self.graph.parse(str(path), format="turtle")
        logger.debug("Loaded %d triples from %s", len(self.graph), path)

    def save(self, path: str | Path | None = None) -> Path:
        """Serialize the graph as Turtle.

        Args:
            path: Destination file, defaults to the bound path

        Returns:
            Path written

        Raises:
            ValueError: If no path is given and none is bound
        """
        destination = Path(path) if path else self.path
        if destination is None:
            raise ValueError("No path to save the graph to")
        destination.parent.mkdir(parents=True, exist_ok=True)
        with self._guard("save"):
            self.graph.serialize(destination=str(destination), format="turtle")
        return destination

    # ==========================================================================
    # EDGE OPERATIONS
    # ==========================================================================

    def get_edges(
        self,
        subject: str,
        predicate: Predicate,
        object: str | None = None,
    ) -> list[Edge]:
        predicate = Predicate(predicate)
        pattern = (
            URIRef(pid.to_uri(subject)),
            URIRef(predicate.value),
            URIRef(pid.to_uri(object)) if object is not None else None,
        )
        with self._guard("get_edges"):
            triples = list(self.graph.triples(pattern))
        return [
            Edge(subject=subject, predicate=predicate, object=pid.strip_uri(str(o)))
            for _, _, o in triples
        ]

    def insert_edge(self, subject: str, predicate: Predicate, object: str) -> bool:
        triple = self._triple(subject, predicate, object)
        with self._guard("insert_edge"):
            if triple in self.graph:
                return False
            self.graph.add(triple)
        return True

    def remove_edge(self, subject: str, predicate: Predicate, object: str) -> bool:
        triple = self._triple(subject, predicate, object)
        with self._guard("remove_edge"):
            if triple not in self.graph:
                return False
            self.graph.remove(triple)
        return True

    @staticmethod
    def _triple(subject: str, predicate: Predicate, object: str) -> tuple[URIRef, URIRef, URIRef]:
        return (
            URIRef(pid.to_uri(subject)),
            URIRef(Predicate(predicate).value),
            URIRef(pid.to_uri(object)),
        )

    # ==========================================================================
    # MEMBER LISTING
    # ==========================================================================

    def query_members(
        self,
        collection_id: str,
        page: int,
        limit: int,
        context: str = CONTEXT_VIEW,
    ) -> tuple[int, list[dict[str, Any]]]:
        bindings = {"collection": URIRef(pid.to_uri(collection_id))}
        with self._guard("query_members"):
            count_result = self.graph.query(COUNT_QUERY, initNs=INIT_NS, initBindings=bindings)
            count = next(iter(count_result)).asdict().get("count")
            result = self.graph.query(
                _members_query(context, page, limit),
                initNs=INIT_NS,
                initBindings=bindings,
            )
            rows = [row.asdict() for row in result]

        results = []
        for row in rows:
            results.append({
                "object": pid.strip_uri(str(row["object"])),
                "title": str(row["title"]) if "title" in row else None,
                "owner": str(row["owner"]) if "owner" in row else None,
                "date_modified": str(row["date_modified"]) if "date_modified" in row else None,
            })
        return int(count.toPython()) if count is not None else 0, results

    # ==========================================================================
    # ENTITY METADATA
    # ==========================================================================

    def put_entity(self, entity: Entity) -> None:
        subject = URIRef(pid.to_uri(entity.id))
        with self._guard("put_entity"):
            for field, predicate in ENTITY_FIELDS.items():
                value = getattr(entity, field)
                if value is None:
                    self.graph.remove((subject, predicate, None))
                else:
                    self.graph.set((subject, predicate, Literal(value)))

    def get_entity(self, entity_id: str) -> Entity | None:
        subject = URIRef(pid.to_uri(entity_id))
        with self._guard("get_entity"):
            values = {
                field: self.graph.value(subject, predicate)
                for field, predicate in ENTITY_FIELDS.items()
            }
        if all(value is None for value in values.values()):
            return None
        return Entity(
            id=pid.strip_uri(entity_id),
            **{field: str(value) if value is not None else None for field, value in values.items()},
        )
