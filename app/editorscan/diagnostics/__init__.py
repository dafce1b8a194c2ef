"""Error classification and recovery advice for editor failures."""

from editorscan.diagnostics.advisor import ErrorAdvisor, action_labels, render_message

__all__ = ["ErrorAdvisor", "action_labels", "render_message"]
