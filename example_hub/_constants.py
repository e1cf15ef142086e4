"""Common literal values used across example_hub.

These defaults seed the catalog loader so generators, templates, and tests
share the same names for generated folders and files.

Examples
--------
>>> from example_hub import _constants
>>> "node_modules" in _constants.DEFAULT_EXCLUDE_DIRS
True
>>> _constants.DEFAULT_PACKAGE_NAME.format(namespace="fhevm-example", key="fhe-counter")
'fhevm-example-fhe-counter'
"""

DEFAULT_CATALOG_PATH = "catalog.yaml"
DEFAULT_NAMESPACE = "fhevm-example"
DEFAULT_TEMPLATE_DIR = "base-template"
DEFAULT_OUTPUT_DIR = "examples"
DEFAULT_DOCS_DIR = "docs"
DEFAULT_SUMMARY_FILE = "SUMMARY.md"

DEFAULT_IMPL_DIR = "contracts"
DEFAULT_TEST_DIR = "test"
DEFAULT_DEPLOY_DIR = "deploy"
DEFAULT_DEPLOY_FILE = "deploy.ts"

DEFAULT_EXCLUDE_DIRS = (
    "node_modules",
    "artifacts",
    "cache",
    "coverage",
    "typechain-types",
    "types",
    "deployments",
    ".git",
)
DEFAULT_ESSENTIAL_FILES = (
    "hardhat.config.ts",
    "tsconfig.json",
    "package.json",
    ".gitignore",
    ".env.example",
)
DEFAULT_SHARED_DIRS = ("contracts/interfaces", "contracts/libraries")
DEFAULT_PACKAGE_MANIFESTS = ("package.json", "pyproject.toml")

DEFAULT_PACKAGE_NAME = "{namespace}-{key}"

USAGE_COMMANDS = (
    ("Compile", "npm run compile"),
    ("Test", "npm run test"),
    ("Deploy", "npx hardhat deploy --network localhost"),
)
