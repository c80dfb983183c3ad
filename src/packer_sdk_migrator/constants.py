"""
Shared constants for the Packer SDK migrator.
"""

# Module paths
PACKER_MODULE_PATH = "github.com/hashicorp/packer"
SDK_MODULE_PATH = "github.com/hashicorp/packer-plugin-sdk"

# Version constraints checked before migrating
GO_VERSION_CONSTRAINT = ">=1.12"
PACKER_VERSION_CONSTRAINT = ">=1.5.0"
SDK_VERSION_CONSTRAINT = ">=0.0.11"

# SDK release written to go.mod when no version is given
DEFAULT_SDK_VERSION = "v0.0.11"

# File names
GO_MOD_FILE = "go.mod"
VENDOR_DIR = "vendor"
GO_FILE_EXTENSION = ".go"

# Environment variables
GOPATH_ENV = "GOPATH"
SEARCH_PATH_ENV = "PACKER_SDK_MIGRATOR_SEARCH_PATH"
DEPRECATIONS_ENV = "PACKER_SDK_MIGRATOR_DEPRECATIONS"
GO_BINARY_ENV = "PACKER_SDK_MIGRATOR_GO"

# Directory walk filtering; the go tool itself ignores testdata and
# directories starting with "." or "_"
FILTER_CONFIG = {
    "exclude_directories": {
        VENDOR_DIR,
        'testdata',
        'node_modules',
        '.git', '.svn', '.hg', '.bzr',
        '.idea', '.vscode',
    },

    "exclude_files": {
        '*.tmp', '*.swp', '*.swo',
        '*.bak', '*~', '*.orig',
    },

    "supported_extensions": {GO_FILE_EXTENSION},
}

# Fixed-schema record emitted by `check --csv`
CHECK_CSV_HEADER = (
    "go_version,go_version_satisfies_constraint,uses_go_modules,sdk_version,"
    "sdk_version_satisfies_constraint,does_not_use_removed_packages,"
    "all_constraints_satisfied"
)
