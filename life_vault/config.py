"""全局配置与路径。环境变量只在导入时读取一次。"""
import os
from pathlib import Path


def env_flag(name: str, default: bool = False) -> bool:
    """读取布尔型环境变量：仅 "true"（不区分大小写）视为真。"""
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() == "true"


# 项目根目录（life_vault 包所在目录的上一级）
ROOT_DIR = Path(__file__).resolve().parent.parent
# 数据目录：档案、记录、文档、密钥等
DATA_DIR = Path(os.environ.get("LIFE_VAULT_DATA_DIR", "") or ROOT_DIR / "data")
COLLECTIONS_DIR = DATA_DIR / "collections"  # people_v1 / pets_v1 / records_v1:* 等
SECURE_DIR = DATA_DIR / "secure"  # accessToken、本地模式开关

# 远端 GraphQL 接口
GRAPHQL_URL = os.environ.get("LIFE_VAULT_GRAPHQL_URL", "").strip() or "http://127.0.0.1:4000/graphql"
REMOTE_TIMEOUT = 30  # 秒
DEFAULT_VAULT_NAME = "My Family Vault"

# 构建期强制本地模式（为真时覆盖用户保存的开关）
LOCAL_ONLY = env_flag("LIFE_VAULT_LOCAL_ONLY")

LOG_LEVEL = os.environ.get("LIFE_VAULT_LOG_LEVEL", "INFO").upper()

# 存储结构版本：与持久化值不一致时清空各版本化集合
STORAGE_SCHEMA_VERSION = "6"


def ensure_dirs() -> None:
    """确保数据目录存在。"""
    for d in (DATA_DIR, COLLECTIONS_DIR, SECURE_DIR):
        d.mkdir(parents=True, exist_ok=True)
