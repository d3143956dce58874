# -*- coding: utf-8 -*-
"""
Catalog Manager Module
Stores feature types, layers and layer groups (with their bounds) in a
SQLite database. Rows are exchanged as plain dicts; the catalog repository
translates them into domain objects.
"""

import sqlite3
import uuid

from .core.domain.models import AnyOf, MemberIn, RootIn


class CatalogManager:
    """Manages catalog metadata in a SQLite database."""

    def __init__(self, db_path):
        self.db_path = db_path
        self.connection = None

    # ------------------------------------------------------------------ #
    #  Connection
    # ------------------------------------------------------------------ #

    def connect(self):
        """Open SQLite connection and ensure the schema exists."""
        self.connection = sqlite3.connect(self.db_path)
        self.connection.row_factory = sqlite3.Row
        self.connection.execute("PRAGMA foreign_keys = ON")
        self._create_tables()

    def disconnect(self):
        """Close the SQLite connection."""
        if self.connection:
            self.connection.close()
            self.connection = None

    def _create_tables(self):
        """Create catalog tables if they do not exist."""
        cursor = self.connection.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS feature_types (
                id TEXT PRIMARY KEY,
                namespace TEXT NOT NULL DEFAULT '',
                local_name TEXT NOT NULL,
                native_crs TEXT NOT NULL,
                min_x REAL, max_x REAL, min_y REAL, max_y REAL,
                UNIQUE(namespace, local_name)
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS layers (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                feature_type_id TEXT NOT NULL,
                FOREIGN KEY (feature_type_id) REFERENCES feature_types(id) ON DELETE CASCADE
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS layer_groups (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                workspace TEXT NOT NULL DEFAULT '',
                root_layer_id TEXT DEFAULT NULL,
                crs TEXT DEFAULT NULL,
                min_x REAL, max_x REAL, min_y REAL, max_y REAL,
                UNIQUE(workspace, name)
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS layer_group_members (
                group_id TEXT NOT NULL,
                position INTEGER NOT NULL,
                member_id TEXT NOT NULL,
                PRIMARY KEY (group_id, position),
                FOREIGN KEY (group_id) REFERENCES layer_groups(id) ON DELETE CASCADE
            )
        """)
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_layer_group_members_member "
            "ON layer_group_members(member_id)"
        )

        self.connection.commit()
        cursor.close()

    # ------------------------------------------------------------------ #
    #  Feature types
    # ------------------------------------------------------------------ #

    def insert_feature_type(self, namespace, local_name, native_crs,
                            bounds=None, feature_type_id=None):
        """Insert a feature type. ``bounds`` is (min_x, max_x, min_y, max_y) or None.

        Returns the feature type id.
        """
        feature_type_id = feature_type_id or str(uuid.uuid4())
        min_x, max_x, min_y, max_y = bounds or (None, None, None, None)
        cursor = self.connection.cursor()
        cursor.execute(
            """INSERT INTO feature_types
               (id, namespace, local_name, native_crs, min_x, max_x, min_y, max_y)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (feature_type_id, namespace, local_name, native_crs,
             min_x, max_x, min_y, max_y)
        )
        self.connection.commit()
        cursor.close()
        return feature_type_id

    def get_feature_type(self, namespace, local_name):
        """Return a feature type row dict or None."""
        cursor = self.connection.cursor()
        cursor.execute(
            """SELECT id, namespace, local_name, native_crs, min_x, max_x, min_y, max_y
               FROM feature_types WHERE namespace = ? AND local_name = ?""",
            (namespace, local_name)
        )
        row = cursor.fetchone()
        cursor.close()
        return dict(row) if row else None

    def update_feature_type_bounds(self, feature_type_id, bounds):
        """Overwrite the stored native bounds of a feature type.

        Returns True when a row was updated.
        """
        cursor = self.connection.cursor()
        cursor.execute(
            """UPDATE feature_types SET min_x = ?, max_x = ?, min_y = ?, max_y = ?
               WHERE id = ?""",
            (*bounds, feature_type_id)
        )
        self.connection.commit()
        updated = cursor.rowcount > 0
        cursor.close()
        return updated

    # ------------------------------------------------------------------ #
    #  Layers
    # ------------------------------------------------------------------ #

    def insert_layer(self, name, feature_type_id, layer_id=None):
        """Insert a layer backed by ``feature_type_id``. Returns the layer id."""
        layer_id = layer_id or str(uuid.uuid4())
        cursor = self.connection.cursor()
        cursor.execute(
            "INSERT INTO layers (id, name, feature_type_id) VALUES (?, ?, ?)",
            (layer_id, name, feature_type_id)
        )
        self.connection.commit()
        cursor.close()
        return layer_id

    def get_layers_for_feature_type(self, feature_type_id):
        """Return list of layer row dicts (with the backing feature type name)."""
        cursor = self.connection.cursor()
        cursor.execute(
            """SELECT l.id, l.name, f.namespace, f.local_name
               FROM layers l JOIN feature_types f ON f.id = l.feature_type_id
               WHERE l.feature_type_id = ? ORDER BY l.name""",
            (feature_type_id,)
        )
        rows = cursor.fetchall()
        cursor.close()
        return [dict(r) for r in rows]

    # ------------------------------------------------------------------ #
    #  Layer groups
    # ------------------------------------------------------------------ #

    def insert_layer_group(self, name, member_ids, crs=None, bounds=None,
                           root_layer_id=None, workspace='', group_id=None):
        """Insert a layer group and its ordered members. Returns the group id."""
        group_id = group_id or str(uuid.uuid4())
        min_x, max_x, min_y, max_y = bounds or (None, None, None, None)
        cursor = self.connection.cursor()
        cursor.execute(
            """INSERT INTO layer_groups
               (id, name, workspace, root_layer_id, crs, min_x, max_x, min_y, max_y)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (group_id, name, workspace, root_layer_id, crs,
             min_x, max_x, min_y, max_y)
        )
        cursor.executemany(
            "INSERT INTO layer_group_members (group_id, position, member_id) VALUES (?, ?, ?)",
            [(group_id, position, member_id)
             for position, member_id in enumerate(member_ids)]
        )
        self.connection.commit()
        cursor.close()
        return group_id

    def get_group_member_ids(self, group_id):
        """Return the member ids of a group in position order."""
        cursor = self.connection.cursor()
        cursor.execute(
            """SELECT member_id FROM layer_group_members
               WHERE group_id = ? ORDER BY position""",
            (group_id,)
        )
        rows = cursor.fetchall()
        cursor.close()
        return [r[0] for r in rows]

    def query_layer_groups(self, group_filter):
        """Open a cursor over the layer groups matching ``group_filter``.

        The caller owns the returned cursor and must close it.
        """
        where, params = self._filter_to_sql(group_filter)
        cursor = self.connection.cursor()
        cursor.execute(
            f"""SELECT g.id, g.name, g.workspace, g.root_layer_id, g.crs,
                       g.min_x, g.max_x, g.min_y, g.max_y
                FROM layer_groups g WHERE {where} ORDER BY g.name""",
            params
        )
        return cursor

    def update_layer_group_bounds(self, group_id, crs, bounds):
        """Overwrite the stored bounds (and CRS) of a layer group.

        Returns True when a row was updated.
        """
        cursor = self.connection.cursor()
        cursor.execute(
            """UPDATE layer_groups SET crs = ?, min_x = ?, max_x = ?, min_y = ?, max_y = ?
               WHERE id = ?""",
            (crs, *bounds, group_id)
        )
        self.connection.commit()
        updated = cursor.rowcount > 0
        cursor.close()
        return updated

    # ------------------------------------------------------------------ #
    #  Filter compilation
    # ------------------------------------------------------------------ #

    def _filter_to_sql(self, group_filter):
        """Compile a GroupFilter into a WHERE clause over ``layer_groups g``.

        Returns:
            tuple: (sql: str, params: list)
        """
        if isinstance(group_filter, MemberIn):
            ids = sorted(group_filter.ids)
            if not ids:
                return "0", []
            marks = ", ".join("?" * len(ids))
            return (
                f"g.id IN (SELECT group_id FROM layer_group_members "
                f"WHERE member_id IN ({marks}))",
                ids,
            )
        if isinstance(group_filter, RootIn):
            ids = sorted(group_filter.ids)
            if not ids:
                return "0", []
            marks = ", ".join("?" * len(ids))
            return f"g.root_layer_id IN ({marks})", ids
        if isinstance(group_filter, AnyOf):
            if not group_filter.filters:
                return "0", []
            clauses, params = [], []
            for sub_filter in group_filter.filters:
                sql, sub_params = self._filter_to_sql(sub_filter)
                clauses.append(f"({sql})")
                params.extend(sub_params)
            return " OR ".join(clauses), params
        raise TypeError(f"Unsupported group filter: {group_filter!r}")
