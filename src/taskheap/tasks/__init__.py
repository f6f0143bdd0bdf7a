"""
Task subsystem.

Components:
- task_models.py: data structures (Task, StoreInvariantError)
- task_store.py: in-memory storage with a priority heap and a tag index
- task_api.py: input parsing / formatting helpers used by front-ends
"""
