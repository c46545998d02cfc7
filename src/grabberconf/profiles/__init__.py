"""
Configuration profiles: the packaged ones, the user profiles file and
eGrabber script import/export.

Examples
--------
```python
from grabberconf.profiles import load_profile, render_script
profile = load_profile("full_hd_25fps")
print(render_script(profile))
```
"""

from .builtin import (
    BUILTIN_PROFILES,
    FULL_HD_25FPS,
    LINE_TRIGGER_STROBE,
    get_builtin_profile,
)
from .profile_file import (
    copy_profile,
    create_default_profiles_file,
    format_step,
    list_available_profiles,
    load_profile,
    parse_step,
    profiles_file_path,
    save_profile,
)
from .script import load_script, parse_script, render_script, write_script

__all__ = [
    "BUILTIN_PROFILES",
    "FULL_HD_25FPS",
    "LINE_TRIGGER_STROBE",
    "get_builtin_profile",
    "copy_profile",
    "create_default_profiles_file",
    "format_step",
    "list_available_profiles",
    "load_profile",
    "parse_step",
    "profiles_file_path",
    "save_profile",
    "load_script",
    "parse_script",
    "render_script",
    "write_script",
]
