"""Constants for the GitHub client."""

from octoref.github.types import WorkflowStatus

# GitHub caps per_page at 100 for every list endpoint we use
PAGE_SIZE = 100

# Tree entry modes accepted by the Git Trees API
MODE_FILE = "100644"
MODE_EXECUTABLE = "100755"
MODE_SUBDIRECTORY = "040000"
MODE_SUBMODULE = "160000"
MODE_SYMLINK = "120000"

# Workflow run states that mean "still running or about to run"
ACTIVE_WORKFLOW_STATUSES: tuple[WorkflowStatus, ...] = (
    WorkflowStatus.IN_PROGRESS,
    WorkflowStatus.REQUESTED,
    WorkflowStatus.WAITING,
    WorkflowStatus.QUEUED,
)
