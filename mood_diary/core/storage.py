#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mood Diary - Storage
Долговременное key-value хранилище в одном JSON файле с атомарной
записью, резервными копиями и восстановлением после повреждения.

Файл хранит объект {ключ: значение}; каждое изменение перезаписывает
файл целиком через временный файл.

Версия: 1.0.0
"""

import json
import threading
import shutil
import gzip
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Any
import logging

from mood_diary.core.exceptions import StorageError, StorageWriteError, StorageCorruptionError

logger = logging.getLogger(__name__)

class BackupManager:
    """Менеджер резервных копий"""

    def __init__(self, backup_dir: Path, max_backups: int = 10):
        self.backup_dir = backup_dir
        self.max_backups = max_backups
        self.backup_dir.mkdir(parents=True, exist_ok=True)

    def create_backup(self, source_file: Path, compressed: bool = True) -> Optional[Path]:
        """Создать резервную копию"""
        if self.max_backups == 0:
            return None
        try:
            if not source_file.exists():
                logger.warning(f"Source file {source_file} does not exist for backup")
                return None

            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S_%f')
            backup_name = f"backup_{timestamp}.json"

            if compressed:
                backup_name += ".gz"
                backup_path = self.backup_dir / backup_name

                with open(source_file, 'rb') as f_in:
                    with gzip.open(backup_path, 'wb') as f_out:
                        f_out.writelines(f_in)
            else:
                backup_path = self.backup_dir / backup_name
                shutil.copy2(source_file, backup_path)

            logger.info(f"Backup created: {backup_path}")
            self._cleanup_old_backups()
            return backup_path

        except OSError as e:
            logger.error(f"Failed to create backup: {e}")
            return None

    def restore_backup(self, backup_path: Path, target_file: Path) -> bool:
        """Восстановить из резервной копии"""
        try:
            if not backup_path.exists():
                logger.error(f"Backup file {backup_path} does not exist")
                return False

            if backup_path.name.endswith('.gz'):
                with gzip.open(backup_path, 'rb') as f_in:
                    raw = f_in.read()
            else:
                raw = backup_path.read_bytes()

            # Битую копию не восстанавливаем
            parsed = json.loads(raw.decode('utf-8'))
            if not isinstance(parsed, dict):
                logger.error(f"Backup {backup_path} does not hold a JSON object, skipped")
                return False

            tmp_file = target_file.with_suffix('.restore.tmp')
            tmp_file.write_bytes(raw)
            tmp_file.replace(target_file)

            logger.info(f"Backup restored from {backup_path} to {target_file}")
            return True

        except (OSError, ValueError) as e:
            logger.error(f"Failed to restore backup {backup_path}: {e}")
            return False

    def list_backups(self) -> List[Dict[str, Any]]:
        """Получить список всех резервных копий, новые первыми"""
        backups = []

        for backup_file in self.backup_dir.glob("backup_*.json*"):
            try:
                stat = backup_file.stat()
                backups.append({
                    'name': backup_file.name,
                    'path': str(backup_file),
                    'size_kb': stat.st_size / 1024,
                    'created': datetime.fromtimestamp(stat.st_mtime).isoformat(),
                    'compressed': backup_file.name.endswith('.gz')
                })
            except OSError as e:
                logger.warning(f"Failed to get info for backup {backup_file}: {e}")

        # имя содержит отметку времени с микросекундами
        return sorted(backups, key=lambda x: x['name'], reverse=True)

    def _cleanup_old_backups(self) -> None:
        """Удалить старые резервные копии"""
        try:
            backups = sorted(self.backup_dir.glob("backup_*.json*"), key=lambda p: p.name, reverse=True)

            for backup in backups[self.max_backups:]:
                backup.unlink()
                logger.info(f"Removed old backup: {backup}")

        except OSError as e:
            logger.error(f"Failed to cleanup old backups: {e}")

class JsonStorage:
    """Именованные значения в одном JSON файле"""

    def __init__(self, data_file: Path, backup_manager: Optional[BackupManager] = None):
        self.data_file = Path(data_file)
        self.backup_manager = backup_manager
        self.file_lock = threading.RLock()
        self.data_file.parent.mkdir(parents=True, exist_ok=True)
        self._data: Optional[Dict[str, Any]] = None

    # ===== PUBLIC API =====

    def get(self, key: str, default: Any = None) -> Any:
        with self.file_lock:
            return self._read().get(key, default)

    def contains(self, key: str) -> bool:
        with self.file_lock:
            return key in self._read()

    def set(self, key: str, value: Any) -> None:
        """Записать значение; возвращается только после записи на диск"""
        with self.file_lock:
            data = dict(self._read())
            data[key] = value
            self._save_data_sync(data)
            self._data = data

    def remove(self, key: str) -> bool:
        with self.file_lock:
            data = dict(self._read())
            if key not in data:
                return False
            del data[key]
            self._save_data_sync(data)
            self._data = data
            return True

    def backup(self) -> Optional[Path]:
        if not self.backup_manager or not self.data_file.exists():
            return None
        with self.file_lock:
            return self.backup_manager.create_backup(self.data_file)

    # ===== INTERNALS =====

    def _read(self) -> Dict[str, Any]:
        if self._data is None:
            self._data = self._load_sync()
        return self._data

    def _load_sync(self) -> Dict[str, Any]:
        """Синхронная загрузка файла"""
        if not self.data_file.exists():
            logger.info(f"Storage file {self.data_file} does not exist, starting empty")
            return {}

        try:
            with open(self.data_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise StorageCorruptionError(f"Expected a JSON object in {self.data_file}")
            logger.info(f"Loaded storage {self.data_file} with keys: {sorted(data)}")
            return data

        except (json.JSONDecodeError, UnicodeDecodeError, StorageCorruptionError) as e:
            logger.error(f"Storage file is corrupted: {e}")
            return self._handle_corruption()
        except OSError as e:
            logger.error(f"Failed to load storage: {e}")
            raise StorageError(f"Failed to load storage: {e}")

    def _handle_corruption(self) -> Dict[str, Any]:
        """Обработка повреждения файла"""
        logger.warning("Attempting to recover from storage corruption...")

        quarantine = self.data_file.with_suffix(self.data_file.suffix + '.corrupted')
        shutil.copy2(self.data_file, quarantine)
        logger.warning(f"Corrupted file preserved as {quarantine}")

        if self.backup_manager:
            for backup in self.backup_manager.list_backups():
                if self.backup_manager.restore_backup(Path(backup['path']), self.data_file):
                    logger.info(f"Successfully restored from backup: {backup['name']}")
                    with open(self.data_file, 'r', encoding='utf-8') as f:
                        return json.load(f)

        logger.warning("Could not restore from any backup, starting with empty storage")
        self.data_file.unlink()
        return {}

    def _save_data_sync(self, data: Dict[str, Any]) -> None:
        """Синхронное сохранение данных"""
        # Атомарное сохранение через временный файл
        temp_file = self.data_file.with_suffix('.tmp')

        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)

            # Проверяем целостность записанного файла
            with open(temp_file, 'r', encoding='utf-8') as f:
                json.load(f)

            temp_file.replace(self.data_file)
            logger.debug(f"Storage saved to {self.data_file}")

        except (OSError, TypeError, ValueError) as e:
            # Очищаем временный файл в случае ошибки
            if temp_file.exists():
                temp_file.unlink()
            logger.error(f"Failed to save storage: {e}")
            raise StorageWriteError(f"Не удалось сохранить данные: {e}") from e

__all__ = [
    'BackupManager',
    'JsonStorage'
]
