"""
Command-line interface for grabberconf.

Built with Click; every group accepts `--tree` to print its command tree.

Examples
--------
Applying the default profile to the first camera:
```bash
$ grabberconf apply
```

Applying the full-frame profile to the second camera, logging to the console:
```bash
$ grabberconf apply full_hd_25fps --index 1 --log-to-stdout
```

Checking what a profile would send:
```bash
$ grabberconf apply line_trigger_strobe --dry-run
```

CLI Tree
--------

```
$ grabberconf --tree
cli
└── apply
└── discover
└── profile
    └── copy
    └── export
    └── import
    └── init
    └── list
    └── show
```
"""

from .base import cli, tree_option
from .profile import profile

cli.add_command(profile)

__all__ = ["cli", "tree_option"]
