"""
Abstract base class for import extraction strategies.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Optional, Tuple

import tree_sitter

from ..constants import REQUIRE_FUNCTION
from ..errors import ParseError
from .models import ImportReference, NodeKind

logger = logging.getLogger(__name__)


class ParsingStrategy(ABC):
    """Abstract base class for import extraction strategies."""

    @abstractmethod
    def get_language_name(self) -> str:
        """Return the language name this strategy handles."""
        pass

    @abstractmethod
    def get_supported_extensions(self) -> List[str]:
        """Return list of file extensions this strategy supports."""
        pass

    @abstractmethod
    def extract_imports(self, file_path: str, content: str) -> List[ImportReference]:
        """
        Extract statically declared module specifiers from file content.

        Args:
            file_path: Path to the file being parsed, used in diagnostics
            content: File content as string

        Returns:
            ImportReference list in source order

        Raises:
            ParseError: If the content does not parse cleanly
        """
        pass


class TreeSitterParsingStrategy(ParsingStrategy):
    """
    Shared tree-sitter walk for the JavaScript family of grammars.

    Subclasses provide the grammar. Grammar node types are translated into
    NodeKind variants through ``node_kinds`` so the walk itself never looks
    at grammar-specific type names.
    """

    node_kinds: Dict[str, NodeKind] = {
        'import_statement': NodeKind.IMPORT_DECLARATION,
        'call_expression': NodeKind.CALL_EXPRESSION,
        'string': NodeKind.STRING_LITERAL,
    }

    def __init__(self, language: tree_sitter.Language):
        self.language = language

    def kind_of(self, node: tree_sitter.Node) -> NodeKind:
        return self.node_kinds.get(node.type, NodeKind.OTHER)

    def parse(self, file_path: str, source: bytes, line_offset: int = 0) -> tree_sitter.Tree:
        """Parse source bytes, raising ParseError if the tree has errors.

        ``line_offset`` shifts the reported error line for code embedded
        further down a file.
        """
        parser = tree_sitter.Parser(self.language)
        tree = parser.parse(source)
        if tree.root_node.has_error:
            line = self._first_error_line(tree.root_node)
            if line is not None:
                line += line_offset
            raise ParseError(file_path, f"syntax error in {self.get_language_name()} source", line)
        return tree

    def extract_imports(self, file_path: str, content: str, line_offset: int = 0) -> List[ImportReference]:
        source = content.encode('utf8')
        tree = self.parse(file_path, source, line_offset)

        references = []
        for kind, node in self.walk(tree.root_node):
            if kind is NodeKind.IMPORT_DECLARATION:
                specifier = self._import_source(node, source)
            elif kind is NodeKind.CALL_EXPRESSION:
                specifier = self._require_argument(node, source)
            else:
                specifier = None

            if specifier is not None:
                references.append(ImportReference(
                    specifier=specifier,
                    file_path=file_path,
                    line=node.start_point[0] + 1 + line_offset,
                ))
        return references

    def walk(self, root: tree_sitter.Node) -> Iterator[Tuple[NodeKind, tree_sitter.Node]]:
        """Depth-first, source-ordered walk yielding every node that is not OTHER."""
        stack = [root]
        while stack:
            node = stack.pop()
            kind = self.kind_of(node)
            if kind is not NodeKind.OTHER:
                yield kind, node
            stack.extend(reversed(node.children))

    def _import_source(self, node: tree_sitter.Node, source: bytes) -> Optional[str]:
        source_node = node.child_by_field_name('source')
        if source_node is None:
            # TypeScript: import x = require("y")
            for child in node.named_children:
                source_node = child.child_by_field_name('source')
                if source_node is not None:
                    break
        if source_node is None or self.kind_of(source_node) is not NodeKind.STRING_LITERAL:
            return None
        return self._literal_value(source_node, source)

    def _require_argument(self, node: tree_sitter.Node, source: bytes) -> Optional[str]:
        callee = node.child_by_field_name('function')
        if callee is None or callee.type != 'identifier':
            return None
        if self._text(callee, source) != REQUIRE_FUNCTION:
            return None

        arguments = node.child_by_field_name('arguments')
        if arguments is None:
            return None
        args = [child for child in arguments.named_children if child.type != 'comment']
        if len(args) != 1 or self.kind_of(args[0]) is not NodeKind.STRING_LITERAL:
            return None
        return self._literal_value(args[0], source)

    def _literal_value(self, node: tree_sitter.Node, source: bytes) -> str:
        # Strip the surrounding quotes
        return self._text(node, source)[1:-1]

    @staticmethod
    def _text(node: tree_sitter.Node, source: bytes) -> str:
        return source[node.start_byte:node.end_byte].decode('utf8')

    @staticmethod
    def _first_error_line(root: tree_sitter.Node) -> Optional[int]:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == 'ERROR' or node.is_missing:
                return node.start_point[0] + 1
            if node.has_error:
                stack.extend(reversed(node.children))
        return None
