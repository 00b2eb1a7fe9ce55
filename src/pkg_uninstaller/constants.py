"""
Shared constants for pkg-uninstaller.
"""

# Manifest file names
MANIFEST_FILE = "package.json"
MODULES_DIR = "node_modules"
GITIGNORE_FILE = ".gitignore"

# Manifest sections in the order they are listed to the user
RUNTIME_SECTION = "dependencies"
DEV_SECTION = "devDependencies"
PEER_SECTION = "peerDependencies"
OPTIONAL_SECTION = "optionalDependencies"

MANIFEST_SECTIONS = [
    RUNTIME_SECTION,
    DEV_SECTION,
    PEER_SECTION,
    OPTIONAL_SECTION,
]

# Source extensions the import extractor understands
SOURCE_EXTENSIONS = [
    '.js', '.jsx', '.mjs', '.cjs',    # JavaScript
    '.ts', '.mts', '.cts',            # TypeScript
    '.tsx',                           # TypeScript + JSX
    '.vue', '.svelte',                # Markup with embedded <script> blocks
]

# Centralized filtering configuration
FILTER_CONFIG = {
    "exclude_directories": {
        # Installed dependencies
        'node_modules', 'bower_components', 'jspm_packages',

        # Build outputs
        'dist', 'build', 'out', 'lib-cov', '.output',
        '.next', '.nuxt', '.svelte-kit', '.turbo', '.vercel',

        # Testing & coverage
        'coverage', '.nyc_output',

        # Version control
        '.git', '.svn', '.hg',

        # Tool caches and editor settings
        '.cache', '.parcel-cache', '.vite', '.angular', '.yarn', '.pnpm-store',
        '.idea', '.vscode',
    },

    "exclude_files": {
        # Bundled artifacts
        '*.min.js', '*.bundle.js',

        # Editor and backup files
        '*.swp', '*.swo', '*.bak', '*~', '*.orig',
    },

    "supported_extensions": SOURCE_EXTENSIONS
}

# Module loading function whose literal argument counts as a reference
REQUIRE_FUNCTION = "require"

# Lockfiles used to pick a package manager, checked in order
LOCKFILES = [
    ("yarn.lock", "yarn"),
    ("pnpm-lock.yaml", "pnpm"),
]
DEFAULT_PACKAGE_MANAGER = "npm"

REMOVE_COMMANDS = {
    "yarn": ["yarn", "remove"],
    "pnpm": ["pnpm", "remove"],
    "npm": ["npm", "uninstall"],
}

UNINSTALL_BATCH_SIZE = 5

# Environment override for the CLI log level
LOG_LEVEL_ENV = "PKG_UNINSTALLER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
