"""
Documents and helpers shared across the roopkit test suite.
"""

from roopkit.core.document import DocumentSnapshot
from roopkit.parsing.classifier import classify
from roopkit.parsing.stack import build_stack_trace

SAMPLE_DOCUMENT = """\
use module "Kitchen"
// region Morning routine
start task "Make Coffee"
  when object "mug" appears on "Counter":
    grasp with Gripper1
    if object "mug" is empty:
      pour coffee into "mug"
    elseif object "mug" is full:
      say "Already full"
    else:
      notify user "Check the mug"
  on failure:
    retry
end task
// endregion

template task "Clean Surface" with (area):
  wipe area
end task
"""


def trace_for(text: str):
    """Classify and fold `text` with the default classifier."""
    snapshot = DocumentSnapshot.from_text(text)
    return snapshot, build_stack_trace(classify(line) for line in snapshot.lines)
