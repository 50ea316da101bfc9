"""
Configuration for the code generator pipeline.

Run options (overwrite, backup) live in OutputConfig; the naming and
framework conventions of the generated Java code live in
CodeGeneratorConfig. Both load from plain dictionaries so a JSON
config file can override any subset of the defaults.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        overwrite: Whether existing files are replaced
        backup: Whether existing files are preserved before being replaced
        atomic_write: Whether to write through a temporary file and rename
        file_extension: Extension of generated source files
        encoding: Encoding of generated source files
    """

    overwrite: bool = False
    backup: bool = False
    atomic_write: bool = True
    file_extension: str = ".java"
    encoding: str = "utf-8"


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Package segment after which the directory layout starts
    domain_anchor: str = "domain"

    # Sub-package holding an entity's value objects
    value_object_package: str = "valueobject"

    # Class name suffixes
    aggregate_root_class_suffix: str = "AggregateRootEntity"
    simple_entity_class_suffix: str = "Entity"
    id_class_suffix: str = "Id"
    sn_class_suffix: str = "SN"

    # DDD framework types
    aggregate_root_base_class: str = "com.zz.core.ddd.base.AggregateRoot"
    entity_base_class: str = "com.zz.core.ddd.base.BaseEntity"
    value_object_interface: str = "com.zz.core.ddd.base.ValueObject"

    # Serial-number service used when an entity is first created
    serial_number_generator_class: str = "com.zz.starter.serialno.template.SerialNoGeneratorTemplate"
    serial_number_expression: str = "SerialNoGeneratorTemplate.get().generateSerialNo()"

    # Value object constructor checks
    empty_check_class: str = "com.zz.core.tool.utils.ZzKits"
    empty_check_method: str = "isEmpty"
    exception_class: str = "com.zz.starter.log.exception.ServiceException"
    result_code_class: str = "com.zz.core.tool.api.ResultCode"
    result_code_constant: str = "VALUE_OBJECT_NOT_NULL"

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Worker threads for the write phase (None = executor default)
    max_workers: int | None = None

    # Output configuration
    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                config.output = OutputConfig(**{name: value for name, value in v.items() if hasattr(config.output, name)})
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return asdict(self)
