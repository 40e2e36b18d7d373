"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskDraft, TaskStatus, TaskStats)
- task_client.py: HTTP transport for the remote /tasks collection
- task_controller.py: client-side snapshot + create/update/delete/toggle orchestration
- task_views.py: filtered/search view, statistics and the statistics panel
"""
