translations = {
    "affirmative_answers": ("д", "да", "y", "yes"),
    "scanning": "Сканирование каталога: {root}",
    "no_duplicates": "Дубликаты не найдены.",
    "found_groups": "Найдено групп дубликатов: {groups} (файлов к удалению: {files})",
    "group_header": "Группа {index} | Хеш: {digest} | Размер: {size} | Файлов: {count}",
    "keep_label": "[ОСТ]",
    "delete_label": "[УДЛ]",
    "keep_reason": "Причина: {reason}",
    "reclaimable": "Можно освободить: {size}",
    "confirm_prompt": "Удалить {count} файлов и освободить {size}? [д/Н]: ",
    "confirm_prompt_trash": "Переместить {count} файлов в корзину и освободить {size}? [д/Н]: ",
    "declined": "Удаление отменено пользователем. Файлы не изменены.",
    "dry_run": "Пробный запуск: файлы не изменены.",
    "deleting": "Удаление {count} файлов...",
    "deleted_file": "  удалён {path}",
    "summary_title": "Итог",
    "summary_scanned": "Просканировано файлов: {count}",
    "summary_hashed": "Хешировано файлов: {count}",
    "summary_skipped": "Отсеяно предфильтром: {count}",
    "summary_hash_failures": "Ошибок хеширования: {count}",
    "summary_traversal_errors": "Недоступных каталогов или записей: {count}",
    "summary_groups": "Групп дубликатов: {count}",
    "summary_deleted": "Удалено файлов: {count}",
    "summary_delete_failures": "Ошибок удаления: {count}",
    "summary_reclaimed": "Освобождено: {mb:.2f} МБ ({gb:.2f} ГБ)",
    "summary_interrupted": "Запуск прерван; счётчики отражают выполненную работу.",
    "completed": "Завершено за {seconds:.2f} с.",
}
