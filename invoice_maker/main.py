"""メインエントリーポイント"""
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from invoice_maker.domain.exceptions import InvoiceValidationError
from invoice_maker.infrastructure.config.config_loader import ConfigLoader
from invoice_maker.infrastructure.logging.logging_setup import LoggingSetup
from invoice_maker.infrastructure.services.service_factory import ServiceFactory

project_root = Path(__file__).parent.parent


def load_input(input_file: str) -> Dict[str, Any]:
    """請求書の入力値をJSONファイルから読み込む"""
    with open(input_file, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"入力ファイルの形式が不正です: {input_file}")
    return data


async def main():
    """メイン処理"""
    try:
        config_loader = ConfigLoader(project_root)
        config = config_loader.load_config()
        LoggingSetup.setup(config.log_level, project_root)
        logger = logging.getLogger(__name__)

        logger.info("=== 請求書PDF生成 開始 ===")

        company = config_loader.load_company_profile()
        labels = config_loader.load_labels(config)

        factory = ServiceFactory(logger)
        session = factory.create_form_session(config, company, labels)

        if config.input_file:
            logger.info(f"入力ファイル: {config.input_file}")
            session.load(load_input(config.input_file))

        logger.info(f"請求書番号: {session.draft.invoice_number} / 合計: {session.formatted_total}")

        file_path = await session.submit()
        logger.info(f"=== 成功: {file_path.name} を保存しました ===")

    except InvoiceValidationError as e:
        logger = logging.getLogger(__name__)
        logger.error("=== 入力エラー: 請求書を作成できませんでした ===")
        for path, message in e.errors.items():
            logger.error(f"  - {path}: {message}")
        sys.exit(1)

    except Exception as e:
        logger = logging.getLogger(__name__)
        logger.error(f"=== エラー: {str(e)} ===")
        import traceback
        logger.error(traceback.format_exc())
        sys.exit(1)


def run():
    """コンソールスクリプト用のエントリーポイント"""
    asyncio.run(main())


if __name__ == "__main__":
    run()
