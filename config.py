"""
应用程序配置
"""
# 标准库导包
import os
from typing import List, Optional

# 第三方库导包
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用程序设置类"""

    # 应用基本信息
    APP_NAME: str = "OPERATIONAL JOURNAL"
    APP_VERSION: str = "1.0.0"
    POD_ENV: str = Field(default="test", description="运行环境：test/yufa/online")
    DEBUG: bool = Field(default_factory=lambda: Settings._get_debug())
    RELOAD: bool = False

    # 服务器配置
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)
    WORKERS: int = 1

    # 开发环境数据库配置
    DEV_DB_HOST: str = "localhost:3306"
    DEV_DB_USER: str = "root"
    DEV_DB_PASSWORD: str = "12345678"

    # 线上环境数据库配置
    ONLINE_DB_HOST: str = "localhost:3306"
    ONLINE_DB_USER: str = "root"
    ONLINE_DB_PASSWORD: str = "12345678"

    # 数据库名称
    DB_NAME: str = "operational_journal"

    # 完整数据库URL，设置后覆盖上面的MySQL配置（如 sqlite+aiosqlite:///./journal.db）
    DATABASE_URL: Optional[str] = Field(default=None, description="完整数据库连接URL")

    # 数据库连接池配置
    DB_POOL_SIZE: int = Field(default=10)
    DB_MAX_CONNECTIONS: int = Field(default=20)
    DB_POOL_TIMEOUT: int = Field(default=30)
    DB_POOL_RECYCLE: int = Field(default=3600)

    REDIS_DEV_URL: str = "redis://localhost:6379/0"
    REDIS_YUFA_URL: str = "redis://localhost:6379/0"
    REDIS_ONLINE_URL: str = "redis://localhost:6379/0"

    # CORS配置 - 允许所有跨域请求
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["*"]
    CORS_ALLOW_HEADERS: List[str] = ["*"]

    # 日志配置
    LOG_LEVEL: str = Field(default="info")

    # 认证会话配置
    AUTH_SESSION_TTL: int = 3600 * 12  # 一个班次的会话（12小时）
    AUTH_ALLOW_MOCK_USER: bool = Field(
        default_factory=lambda: Settings._get_debug(),
        description="是否允许无令牌请求使用Header/Mock用户"
    )

    # 日志条目配置
    DEFAULT_ENTRY_STATUS: str = Field(default="active", description="新建条目的默认状态：draft/active")
    REPORT_TITLE: str = Field(default="Оперативный журнал", description="报告标题")

    @property
    def REDIS_KEY_PREFIXES(self) -> dict:
        """Redis key前缀常量"""
        return {
            "AUTH_SESSION": "operational_journal:auth_session:",
        }

    @staticmethod
    def _get_debug() -> bool:
        """获取DEBUG模式，基于POD_ENV环境变量"""
        return os.getenv("POD_ENV", "test").lower() != "online"

    # 根据环境变量设置当前数据库配置
    @property
    def DB_HOST(self) -> str:
        if self.POD_ENV == "online":
            return self.ONLINE_DB_HOST
        else:  # 默认使用开发环境
            return self.DEV_DB_HOST

    @property
    def DB_USER(self) -> str:
        if self.POD_ENV == "online":
            return self.ONLINE_DB_USER
        else:
            return self.DEV_DB_USER

    @property
    def DB_PASSWORD(self) -> str:
        if self.POD_ENV == "online":
            return self.ONLINE_DB_PASSWORD
        else:
            return self.DEV_DB_PASSWORD

    @property
    def REDIS_URL(self) -> str:
        """根据环境返回对应的Redis连接URL"""
        if self.POD_ENV == "online":
            return self.REDIS_ONLINE_URL
        elif self.POD_ENV == "yufa":
            return self.REDIS_YUFA_URL
        else:  # 默认使用开发环境
            return self.REDIS_DEV_URL

    # API文档配置
    @property
    def DOCS_URL(self) -> Optional[str]:
        return "/docs" if self.DEBUG else None

    @property
    def REDOC_URL(self) -> Optional[str]:
        return "/redoc" if self.DEBUG else None

    @property
    def OPENAPI_URL(self) -> Optional[str]:
        return "/openapi.json" if self.DEBUG else None

    class Config:
        """Pydantic配置"""
        env_file = ".env"  # 支持从.env文件读取配置
        env_file_encoding = "utf-8"
        case_sensitive = True


# 创建设置实例
settings = Settings()
