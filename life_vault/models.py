"""模型基类：Python 侧 snake_case，持久化 / 网络侧 camelCase。"""
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class VaultModel(BaseModel):
    """所有档案、记录、文档模型的基类。"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_json_dict(self) -> Dict[str, Any]:
        """按持久化格式导出（camelCase，省略空的可选字段）。"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
