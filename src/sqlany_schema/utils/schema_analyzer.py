"""
Foreign key dependency analysis over a schema snapshot
"""

import networkx as nx
from typing import Any, Dict, List

from ..database.models import DatabaseSchema


def normalize_table_name(name: str) -> str:
    """'"owner"."name"' and 'owner.name' refer to the same table"""
    return name.replace('"', '')


class SchemaAnalyzer:
    """Analyze table dependencies declared by foreign keys"""

    def __init__(self):
        self.relationship_graph = nx.DiGraph()

    def analyze_schema(self, schema: DatabaseSchema) -> Dict[str, Any]:
        """Analyze schema and return insights"""
        self._build_relationship_graph(schema)

        return {
            'dependencies': self._analyze_table_dependencies(schema),
            'circular_references': self._find_circular_references(),
            'insertion_order': self._get_optimal_insertion_order(schema),
            'deletion_order': self._get_optimal_deletion_order(schema)
        }

    def _build_relationship_graph(self, schema: DatabaseSchema):
        """Edges point from a referenced table to the tables that depend on it"""
        self.relationship_graph.clear()

        for table_name in schema.tables:
            self.relationship_graph.add_node(normalize_table_name(table_name))

        for fk in schema.relationships:
            source = normalize_table_name(fk.from_table)
            target = normalize_table_name(fk.to_table)
            # Self references don't constrain ordering
            if source != target:
                self.relationship_graph.add_edge(target, source, name=fk.name, column=fk.column)

    def _analyze_table_dependencies(self, schema: DatabaseSchema) -> Dict[str, List[str]]:
        """Map each table to the tables it references"""
        dependencies = {}

        for table_name, table in schema.tables.items():
            key = normalize_table_name(table_name)
            dependencies[key] = []
            for fk in table.foreign_keys:
                target = normalize_table_name(fk.to_table)
                if target != key and target not in dependencies[key]:
                    dependencies[key].append(target)

        return dependencies

    def _find_circular_references(self) -> List[List[str]]:
        return list(nx.simple_cycles(self.relationship_graph))

    def _get_optimal_insertion_order(self, schema: DatabaseSchema) -> List[str]:
        """Referenced tables first"""
        try:
            return list(nx.topological_sort(self.relationship_graph))
        except nx.NetworkXUnfeasible:
            # Cycles: fall back to dependency-count ordering
            return self._get_dependency_based_order(schema)

    def _get_optimal_deletion_order(self, schema: DatabaseSchema) -> List[str]:
        return list(reversed(self._get_optimal_insertion_order(schema)))

    def _get_dependency_based_order(self, schema: DatabaseSchema) -> List[str]:
        dependencies = self._analyze_table_dependencies(schema)
        return sorted(dependencies, key=lambda name: (len(dependencies[name]), name))
