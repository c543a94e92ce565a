"""
Wire format constants for Factorio .dat files.
"""

# Space-optimised integers: a leading byte of 0xFF means the full width value follows
OPTIM_ESCAPE = 0xFF

# Property tree nesting limit, well below the interpreter recursion limit
MAX_DEPTH = 256

# Top-level sections of mod-settings.dat
SECTION_STARTUP = 'startup'
SECTION_RUNTIME_GLOBAL = 'runtime-global'
SECTION_RUNTIME_PER_USER = 'runtime-per-user'
MOD_SETTINGS_SECTIONS = (SECTION_STARTUP, SECTION_RUNTIME_GLOBAL, SECTION_RUNTIME_PER_USER)
