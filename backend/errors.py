"""
Ошибки приложения и соответствующие им HTTP-статусы
"""


class ProjectBoardError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ProjectBoardError):
    """Некорректные данные запроса: поле, контакт, город, цена"""
    status_code = 400


class NotFoundError(ProjectBoardError):
    status_code = 404


class StorageError(ProjectBoardError):
    """Ошибка чтения или записи файла с проектами"""
    status_code = 500


class UploadError(ProjectBoardError):
    """Неподходящий тип или размер загружаемого файла"""
    status_code = 400
