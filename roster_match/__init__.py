"""Roster matching: reconcile CSV attendance and roster rows with known people.

Pipeline:
- ingest: read CSV text, normalize headers, build typed records
- identity: score names and suggest matches against known records
- review: one-to-one assignment session with human overrides, summary stats
"""
