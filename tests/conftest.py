"""Pytest configuration for ts-preview tests."""

import json

import pytest
from ts_preview.build import shutdown_bundler
from ts_preview.models import VirtualFile
from ts_preview.module_resolution import MemoryVolume
from ts_preview.module_resolution import VirtualFileStore

NODE_MODULES = "/home/web/app/node_modules"


@pytest.fixture(autouse=True)
def _fresh_bundler():
    """Each test gets its own bundler runtime."""
    yield
    shutdown_bundler()


@pytest.fixture
def project_files():
    """A small project mixing slash and no-slash registrations."""
    return [
        VirtualFile(path="/index.ts", code="import { add } from './math';\nconsole.log(add(2, 3));"),
        VirtualFile(path="math.ts", code="export function add(a, b) { return a + b }"),
        VirtualFile(path="/components/Button.tsx", code="export const Button = () => null;"),
        VirtualFile(path="/components/index.ts", code="export * from './Button';"),
    ]


@pytest.fixture
def file_store(project_files):
    return VirtualFileStore(project_files)


@pytest.fixture
def package_volume():
    """Package store with a few installed packages."""
    return MemoryVolume.from_json(
        {
            f"{NODE_MODULES}/react/package.json": json.dumps({"name": "react", "main": "index.js"}),
            f"{NODE_MODULES}/react/index.js": "module.exports = require('./cjs/react.development.js');",
            f"{NODE_MODULES}/react/cjs/react.development.js": "exports.createElement = () => null;",
            f"{NODE_MODULES}/react/jsx-runtime.js": "export const jsx = () => null;",
            f"{NODE_MODULES}/dual/package.json": json.dumps(
                {"name": "dual", "main": "lib/index.cjs.js", "module": "lib/index.esm.js"}
            ),
            f"{NODE_MODULES}/dual/lib/index.esm.js": "export default 'esm';",
            f"{NODE_MODULES}/dual/lib/index.cjs.js": "module.exports = 'cjs';",
            f"{NODE_MODULES}/bare/index.js": "export default 1;",
            f"{NODE_MODULES}/broken/package.json": "{ not json",
            f"{NODE_MODULES}/broken/index.js": "export default 2;",
            f"{NODE_MODULES}/utils/package.json": json.dumps({"name": "utils"}),
            f"{NODE_MODULES}/utils/index.js": "export * from './fp';",
            f"{NODE_MODULES}/utils/fp/index.ts": "export const pipe = () => null;",
            f"{NODE_MODULES}/utils/fp/map.jsx": "export const map = () => null;",
            f"{NODE_MODULES}/@scope/pkg/package.json": json.dumps({"module": "dist/index.mjs"}),
            f"{NODE_MODULES}/@scope/pkg/dist/index.mjs": "export default 'scoped';",
        }
    )
