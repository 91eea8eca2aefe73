import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from ghs.config import get_settings


def get_logger(name: str) -> logging.Logger:
    """ロガーインスタンスを取得

    標準出力はコマンドの出力に使うため、コンソールログは標準エラーに出す。

    Args:
        name: ロガー名（通常は__name__を渡す）

    Returns:
        logging.Logger: 設定済みロガーインスタンス
    """
    settings = get_settings()
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, settings.LOG_LEVEL))

    if not logger.handlers:
        # フォーマッタ
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

        # コンソールハンドラ
        ch = logging.StreamHandler(sys.stderr)
        ch.setFormatter(formatter)
        logger.addHandler(ch)

        # ファイルハンドラ（LOG_FILE 指定時のみ）
        if settings.LOG_FILE:
            log_path = Path(settings.LOG_FILE)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            fh = logging.FileHandler(log_path, encoding="utf-8")
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(formatter)
            logger.addHandler(fh)

    return logger


class StructuredLogger:
    """構造化ログ出力用のヘルパークラス"""

    @staticmethod
    def log_command_execution(
        command_name: str,
        success: bool,
        duration_ms: float,
        metadata: dict = None,
    ):
        """コマンド実行ログを記録

        Args:
            command_name: サブコマンド名
            success: 成功フラグ
            duration_ms: 実行時間（ミリ秒）
            metadata: 追加メタデータ
        """
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event": "command_execution",
            "command": command_name,
            "success": success,
            "duration_ms": duration_ms,
            "metadata": metadata or {},
        }

        logger = get_logger(__name__)
        logger.info(json.dumps(log_entry))
