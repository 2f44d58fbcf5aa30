"""
Current build sync

- categories: which part slots hold one part and which hold several
- models: BuildItem / SavedBuild and the stored document shape
- operations: upsert, remove, clear, totals
- pricing: price parsing and currency display
- store: per-user persistence
- reconciler: session build <-> server build
"""
