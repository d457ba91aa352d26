"""
Shared test setup.

The zone registry and engine settings read ~/.overload-planner/config.yaml,
so HOME is pointed at an empty directory before the package is imported.
"""

import os
import tempfile

os.environ["HOME"] = tempfile.mkdtemp(prefix="overload-planner-home-")
