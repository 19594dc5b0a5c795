"""
Exceções de domínio do pipeline de ingestão e agregação.
"""


class DataDashboardError(Exception):
    """Erro base da aplicação."""


class UnsupportedFormatError(DataDashboardError):
    """Extensão de arquivo não suportada."""

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"Formato não suportado: {extension or '(sem extensão)'}")


class EmptyDatasetError(DataDashboardError):
    """O arquivo não produziu nenhum registro utilizável."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"Nenhum dado encontrado no arquivo: {filename}")


class NotFoundError(DataDashboardError):
    """Entidade (dataset, análise, insight) não encontrada."""

    def __init__(self, entity: str, identifier):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} não encontrado: {identifier}")


class StoreError(DataDashboardError):
    """Falha em uma operação do banco de dados."""


class PartialWriteError(DataDashboardError):
    """A ingestão falhou depois de gravar parte das entidades do dataset."""

    def __init__(self, dataset_id: int, step: str):
        self.dataset_id = dataset_id
        self.step = step
        super().__init__(
            f"Ingestão interrompida na etapa '{step}' do dataset {dataset_id}"
        )
