class BaseErroCore(Exception):
    """Classe base para todas as exceções da Camada Core."""
    pass

class DadosInvalidosError(BaseErroCore):
    """Erro levantado quando dados inválidos são fornecidos."""
    def __init__(self, message="Os dados fornecidos são inválidos."):
        self.message = message
        super().__init__(self.message)

class DataInvalidaError(DadosInvalidosError):
    """Erro levantado quando uma data não pode ser interpretada."""
    def __init__(self, valor):
        self.valor = valor
        super().__init__(f"Data inválida: {valor!r}")

# ===============================================
# ERROS DE PERSISTÊNCIA E ENTIDADE
# ===============================================

class ItemNaoEncontradoError(BaseErroCore):
    """Erro levantado quando um item (genérico) não é encontrado."""
    def __init__(self, message="O item solicitado não foi encontrado."):
        self.message = message
        super().__init__(self.message)

class ProdutoNaoEncontradoError(ItemNaoEncontradoError):
    """Erro levantado quando um produto do carrinho não existe no catálogo."""
    def __init__(self, produto_id: str):
        self.produto_id = produto_id
        super().__init__(f"Produto não encontrado: {produto_id}")

class PedidoNaoEncontradoError(ItemNaoEncontradoError):
    """Erro específico para Pedidos não encontrados."""
    pass

class UsuarioNaoEncontradoError(ItemNaoEncontradoError):
    """Erro específico para Usuários não encontrados."""
    pass

class AcessoNegadoError(BaseErroCore):
    """Erro levantado quando o pedido não pertence ao usuário."""
    def __init__(self, message="Você não tem permissão para acessar este pedido."):
        self.message = message
        super().__init__(self.message)

class PersistenciaError(BaseErroCore):
    """Falha do banco de dados que não deve ser repetida."""
    def __init__(self, message="Erro ao gravar os dados."):
        self.message = message
        super().__init__(self.message)

class NumeroPedidoDuplicadoError(PersistenciaError):
    """O número de pedido gerado já existe (colisão entre requisições concorrentes)."""
    def __init__(self, numero_pedido: str):
        self.numero_pedido = numero_pedido
        super().__init__(f"Número de pedido já utilizado: {numero_pedido}")

class NumeroPedidoIndisponivelError(PersistenciaError):
    """Todas as tentativas de numeração colidiram."""
    def __init__(self, ultimo_numero: str, tentativas: int):
        self.ultimo_numero = ultimo_numero
        self.tentativas = tentativas
        super().__init__(
            f"Não foi possível gerar o número do pedido após {tentativas} tentativas "
            f"(último número tentado: {ultimo_numero})."
        )

# ===============================================
# ERROS DE FLUXO DE COMPRA
# ===============================================

class CarrinhoVazioError(BaseErroCore):
    """Erro levantado ao tentar fazer checkout com carrinho vazio."""
    def __init__(self, message="Pedido deve conter ao menos um item."):
        self.message = message
        super().__init__(self.message)

class EstoqueInsuficienteError(BaseErroCore):
    """Erro levantado quando a quantidade solicitada excede o estoque de um ou mais produtos."""
    def __init__(self, faltas, message="Estoque insuficiente para um ou mais produtos."):
        # faltas: lista de (nome_produto, solicitado, disponivel)
        self.faltas = list(faltas)
        self.message = message
        super().__init__(self.message)

    @property
    def detalhes(self):
        return [
            f"{nome}: solicitado {solicitado}, disponível {disponivel}"
            for nome, solicitado, disponivel in self.faltas
        ]

class StatusInvalidoError(BaseErroCore):
    """Erro levantado ao tentar definir um status de pedido inválido."""
    def __init__(self, message="O status fornecido não é válido para um pedido."):
        self.message = message
        super().__init__(self.message)

class FormaPagamentoInvalidaError(BaseErroCore):
    """Erro levantado ao tentar definir uma forma de pagamento desconhecida."""
    def __init__(self, message="A forma de pagamento fornecida não é válida."):
        self.message = message
        super().__init__(self.message)

class CancelamentoNaoPermitidoError(BaseErroCore):
    """Erro levantado ao cancelar um pedido que já saiu do status pendente."""
    def __init__(self, message="Este pedido não pode mais ser cancelado."):
        self.message = message
        super().__init__(self.message)
