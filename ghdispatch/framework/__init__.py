"""
Dispatch framework: group classification, pacing gates, retries and tree wrapping.

Each component lives in its own module; import them from there, or use the
re-exports of the top-level ghdispatch package.
"""
