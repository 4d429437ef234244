"""Forest route statistics pipeline.

Offline batch stages that build ``forests-with-districts.json``: motorized
route statistics (MVUM roads, MVUM trails, closed roads) for every national
forest and ranger district, reconciled so forest totals equal the sum of
their districts, plus a motorized access scorecard per entity.
"""
