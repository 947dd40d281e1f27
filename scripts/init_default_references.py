"""
初始化默认分类字典的脚本
与条目分类枚举一一对应
"""
# 标准库导包
import asyncio
import sys
from pathlib import Path

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# 项目内部导包
from models import CATEGORY_LABELS
from storage import async_session_factory, init_db, cleanup_db
from storage.repositories import CategoryRepository


# 默认分类配置，sort_order与界面展示顺序一致
DEFAULT_CATEGORIES = [
    {"code": code, "name": name, "sort_order": index * 10}
    for index, (code, name) in enumerate(CATEGORY_LABELS.items(), start=1)
]


async def init_default_categories():
    """初始化默认分类"""
    print("开始初始化默认分类...")

    async with async_session_factory() as session:
        try:
            category_repo = CategoryRepository(session)

            created_count = 0
            skipped_count = 0

            for category_data in DEFAULT_CATEGORIES:
                # 检查分类是否已存在
                existing = await category_repo.get_by_code(category_data["code"])

                if existing:
                    print(f"  - 跳过已存在的分类: {category_data['code']}")
                    skipped_count += 1
                    continue

                # 创建新分类
                category = await category_repo.create(**category_data)
                print(f"  ✓ 创建分类: {category.name} (ID: {category.id})")
                created_count += 1

            await session.commit()
            print(f"\n完成！创建了 {created_count} 个分类，跳过了 {skipped_count} 个已存在的分类。")
            return 0

        except Exception as e:
            await session.rollback()
            print(f"✗ 初始化失败: {str(e)}")
            import traceback
            traceback.print_exc()
            return 1


async def main():
    """主函数"""
    try:
        await init_db()
        return await init_default_categories()
    finally:
        # 清理数据库连接
        await cleanup_db()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
