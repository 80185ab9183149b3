"""Red/Blue Generator -- interactive SvelteKit project scaffolder.

Copies a base template plus exactly one feature template (red or blue pill),
personalises the result, and installs its dependencies.
"""

__version__ = "1.0.0"
