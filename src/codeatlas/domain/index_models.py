from __future__ import annotations

"""
Project Index Data Models.

Provides the recursive node types of the indexed file tree, the per-file
analysis results, and the aggregate root (ProjectIndex) that binds the
tree to its project-level facts. Every model serializes to the JSON
document shape through `to_dict()`.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Set, Tuple, Union

from codeatlas.domain.errors import Diagnostic

# -----------------------------------------------------------------------------
# PER-FILE ANALYSIS RESULTS
# -----------------------------------------------------------------------------

@dataclass
class Highlights:
    """
    Categorized comment texts found in one source file.

    Attributes:
        todos: Comments mentioning "todo".
        fixmes: Comments mentioning "fixme".
        notes: Comments mentioning "note".
    """
    todos: List[str] = field(default_factory=list)
    fixmes: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[str]]:
        return {"todos": list(self.todos), "fixmes": list(self.fixmes), "notes": list(self.notes)}


@dataclass
class SymbolTable:
    """
    Declared and exported names collected from one source file.

    Every list is deduplicated; insertion order carries no meaning.
    """
    functions: List[str] = field(default_factory=list)
    classes: List[str] = field(default_factory=list)
    interfaces: List[str] = field(default_factory=list)
    components: List[str] = field(default_factory=list)
    exports: List[str] = field(default_factory=list)


@dataclass
class SourceAnalysis:
    """Combined result of analyzing a single source text."""
    imports: List[str] = field(default_factory=list)
    symbols: SymbolTable = field(default_factory=SymbolTable)
    highlights: Highlights = field(default_factory=Highlights)

# -----------------------------------------------------------------------------
# TREE NODES
# -----------------------------------------------------------------------------

@dataclass
class FileNode:
    """
    Represents a leaf entry (file) in the indexed tree.

    Attributes:
        name: Last path segment.
        full_path: Slash-separated path relative to the project root.
        size: File size in bytes.
        loc: Line count (naive newline split).
        entry: Whether the file looks like an application entry point.
    """
    name: str
    full_path: str
    size: int = 0
    loc: int = 0
    entry: bool = False
    imports: List[str] = field(default_factory=list)
    functions: List[str] = field(default_factory=list)
    classes: List[str] = field(default_factory=list)
    interfaces: List[str] = field(default_factory=list)
    components: List[str] = field(default_factory=list)
    exports: List[str] = field(default_factory=list)
    highlights: Highlights = field(default_factory=Highlights)

    @property
    def type(self) -> str:
        return "file"

    @property
    def extension(self) -> str:
        """Lowercased text after the last dot (the whole name when there is none)."""
        return self.name.rsplit(".", 1)[-1].lower()

    def apply_analysis(self, analysis: SourceAnalysis) -> None:
        """Copy the results of a successful source analysis onto this node."""
        self.imports = list(analysis.imports)
        self.functions = list(analysis.symbols.functions)
        self.classes = list(analysis.symbols.classes)
        self.interfaces = list(analysis.symbols.interfaces)
        self.components = list(analysis.symbols.components)
        self.exports = list(analysis.symbols.exports)
        self.highlights = analysis.highlights

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "fullPath": self.full_path,
            "size": self.size,
            "loc": self.loc,
            "imports": list(self.imports),
            "highlights": self.highlights.to_dict(),
            "functions": list(self.functions),
            "classes": list(self.classes),
            "interfaces": list(self.interfaces),
            "components": list(self.components),
            "exports": list(self.exports),
            "entry": self.entry,
        }


@dataclass
class FolderNode:
    """
    Represents a directory in the indexed tree.

    Children keep first-seen order. Sub-folders are also indexed by name
    so that every path prefix maps to exactly one FolderNode.
    """
    name: str
    children: List["Node"] = field(default_factory=list)
    _folders: Dict[str, "FolderNode"] = field(default_factory=dict, repr=False, compare=False)

    @property
    def type(self) -> str:
        return "folder"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "children": [child.to_dict() for child in self.children],
        }


Node = Union[FileNode, FolderNode]
Tree = List[Node]


def iter_file_nodes(nodes: Sequence[Node]) -> Iterator[FileNode]:
    """Yield every FileNode of a tree in depth-first, sibling order."""
    for node in nodes:
        if isinstance(node, FileNode):
            yield node
        else:
            yield from iter_file_nodes(node.children)

# -----------------------------------------------------------------------------
# PROJECT-LEVEL MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PackageInfo:
    """
    Read-only summary of the project's package manifest.

    Attributes:
        name: Declared package name.
        version: Declared package version.
        scripts: Script name to command map.
        dependencies: Runtime dependency map.
        dev_dependencies: Development dependency map.
        manager: Detected package manager identifier.
        path: Manifest path relative to the project root.
    """
    name: Optional[str] = None
    version: Optional[str] = None
    scripts: Dict[str, str] = field(default_factory=dict)
    dependencies: Dict[str, str] = field(default_factory=dict)
    dev_dependencies: Dict[str, str] = field(default_factory=dict)
    manager: str = "unknown"
    path: str = ""

    def dependency_names(self) -> List[str]:
        """Merged runtime and development dependency names."""
        merged = dict(self.dependencies)
        merged.update(self.dev_dependencies)
        return list(merged.keys())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "scripts": dict(self.scripts),
            "dependencies": dict(self.dependencies),
            "devDependencies": dict(self.dev_dependencies),
            "manager": self.manager,
            "path": self.path,
        }


@dataclass(frozen=True)
class LanguageCount:
    ext: str
    count: int


@dataclass(frozen=True)
class ProjectStats:
    """File and folder totals plus the top extensions by file count."""
    total_files: int = 0
    total_folders: int = 0
    top_languages: Tuple[LanguageCount, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "totalFolders": self.total_folders,
            "topLanguages": [{"ext": lc.ext, "count": lc.count} for lc in self.top_languages],
        }


@dataclass(frozen=True)
class DependencyGraph:
    """Local module relationships: every file is a node, every local import an edge."""
    nodes: Tuple[str, ...] = ()
    edges: Tuple[Tuple[str, str], ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"nodes": list(self.nodes), "edges": [list(edge) for edge in self.edges]}


@dataclass
class ProjectIndex:
    """
    Aggregate root of one indexed project.

    Everything is fixed at build time except `name` and `tags`, which
    remain editable by the owner of the stored document.

    Attributes:
        tree: Root-level nodes of the indexed file tree.
        entry_points: Full paths of files classified as entry points.
        tags: Detected technology identifiers.
        stats: File/folder totals and language histogram.
        package_info: Manifest summary, when a manifest was found.
        name: Display name of the project.
        diagnostics: Per-file degradations recorded during the build.
    """
    tree: Tree
    entry_points: List[str] = field(default_factory=list)
    tags: Set[str] = field(default_factory=set)
    stats: ProjectStats = field(default_factory=ProjectStats)
    package_info: Optional[PackageInfo] = None
    name: str = ""
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def files(self) -> Iterator[FileNode]:
        return iter_file_nodes(self.tree)

    def find_file(self, full_path: str) -> Optional[FileNode]:
        """Look up a FileNode by its stable full path."""
        for node in self.files():
            if node.full_path == full_path:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "projectName": self.name,
            "fileTree": [node.to_dict() for node in self.tree],
            "entryPoints": list(self.entry_points),
            "tags": sorted(self.tags),
            "stats": self.stats.to_dict(),
            "packageInfo": self.package_info.to_dict() if self.package_info else None,
        }
