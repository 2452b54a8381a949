"""
Base generator interface for all code generation targets.

Defines the contract that language generators implement, and the
driver that resolves a document, renders every type and writes one
file per type.
"""

from abc import ABC, abstractmethod
from importlib.metadata import PackageNotFoundError, version as distribution_version
from typing import Dict, List, Any, Optional
from pathlib import Path

from ...logging_config import get_logger
from .config import GeneratorConfig, get_config_manager, parse_modules
from .naming import NameNormalizer, get_default_normalizer
from .resolver import Diagnostics, TypeResolver
from .schema import OpenAPIDocument
from .templates import TemplateEngine, TemplateError, create_template_engine
from .types import Metadata, Type

logger = get_logger(__name__)

COMMAND_NAME = "openapi-sorbet"
DISTRIBUTION_NAME = "openapi-sorbet"


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'sorbet')."""
        pass

    @property
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.rb')."""
        return self.config.file_extension

    @property
    def normalizer(self) -> NameNormalizer:
        """Naming rules for the target language."""
        return get_default_normalizer()

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate_single_type(self, type_record: Type, metadata: Metadata) -> str:
        """
        Generate source for a single type.

        Args:
            type_record: Resolved type to render
            metadata: Run-level information for the file header

        Returns:
            Generated source for this type only
        """
        pass

    def generate(self, types: List[Type], metadata: Metadata) -> Dict[str, str]:
        """
        Generate source for all types.

        Returns:
            Mapping of file name (with extension) to file content, in type order
        """
        return {
            f"{t.filename}{self.file_extension}": self.format_code(
                self.generate_single_type(t, metadata)
            )
            for t in types
        }

    def validate_types(self, types: List[Type]) -> List[str]:
        """
        Check resolved types for problems specific to the target language.

        Returns:
            List of warning messages (empty if no issues)
        """
        return []

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        files: Dict[str, str],
        output_path: Path,
        types: Optional[List[Type]] = None,
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize generation result.

        Args:
            files: Generated sources keyed by file name
            output_path: Directory the files belong in
            types: The resolved types, in emission order
            warnings: Any warnings from resolution or configuration
            metadata: Additional metadata about generation
        """
        self.files = files
        self.output_path = output_path
        self.types = types or []
        self.warnings = warnings or []
        self.metadata = metadata or {}

    def paths(self) -> List[Path]:
        """Destination path of every generated file."""
        return [self.output_path / name for name in self.files]


def get_version() -> str:
    """Installed version of this tool, or ``(unknown)``."""
    try:
        return distribution_version(DISTRIBUTION_NAME) or "(unknown)"
    except PackageNotFoundError:
        return "(unknown)"


def build_metadata(document: OpenAPIDocument, config: GeneratorConfig) -> Metadata:
    """Run metadata rendered into every file header."""
    return Metadata(
        command=COMMAND_NAME,
        version=get_version(),
        modules=parse_modules(config.module),
        spec_title=document.title,
        spec_version=document.version,
    )


def get_output_path(config: GeneratorConfig, normalizer: NameNormalizer) -> Path:
    """``<output_dir>/<snake module segment>/...``"""
    parts = [normalizer.file_slug(m) for m in parse_modules(config.module)]
    return Path(config.output_dir).joinpath(*parts)


def generate_code(
    generator: CodeGenerator,
    document: OpenAPIDocument,
    diagnostics: Optional[Diagnostics] = None,
) -> GenerationResult:
    """
    Resolve and render a whole document without touching the file system.

    Args:
        generator: Code generator instance
        document: Loaded OpenAPI document
        diagnostics: Collector for recoverable problems; a new one if omitted

    Returns:
        GenerationResult with rendered files, warnings, and metadata

    Raises:
        GeneratorError: If a type cannot be rendered
    """
    config = generator.config
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    resolver = TypeResolver(config, generator.normalizer, diagnostics)
    types = resolver.resolve_document(document)

    warnings = get_config_manager().validate_config(config)
    warnings.extend(diagnostics.messages)
    warnings.extend(generator.validate_types(types))

    run_metadata = build_metadata(document, config)

    try:
        files = generator.generate(types, run_metadata)
    except TemplateError as e:
        raise GeneratorError(f"Code generation failed: {e}") from e

    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "command": run_metadata.command,
        "version": run_metadata.version,
        "spec_title": run_metadata.spec_title,
        "spec_version": run_metadata.spec_version,
        "modules": "::".join(run_metadata.modules),
        "schema_count": len(document.schemas),
        "type_count": len(types),
        "file_count": len(files),
    }

    return GenerationResult(
        files=files,
        output_path=get_output_path(config, generator.normalizer),
        types=types,
        warnings=warnings,
        metadata=metadata,
    )


def write_result(result: GenerationResult) -> List[Path]:
    """
    Write every generated file, creating the output directory first.

    Raises:
        GeneratorError: If the directory or a file cannot be written
    """
    try:
        result.output_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise GeneratorError(
            f"Failed to create output directory {result.output_path}: {e}"
        ) from e

    written = []
    for name, code in result.files.items():
        path = result.output_path / name
        try:
            path.write_text(code, encoding="utf-8")
        except OSError as e:
            raise GeneratorError(f"Failed to write {path}: {e}") from e
        logger.debug("Wrote %s", path)
        written.append(path)

    logger.info("Wrote %d file(s) to %s", len(written), result.output_path)
    return written
