# -*- coding: utf-8 -*-
"""
Core package: Clean Architecture layers for the bounds updater.

Structure:
    core/domain/      : Domain models (pure Python, no pyproj, no database)
    core/catalog/     : Infrastructure: catalog contract + SQLite repository
    core/application/ : Use cases: dirty regions, containment, propagation
"""
