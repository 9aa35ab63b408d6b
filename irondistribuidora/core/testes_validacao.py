import unittest

from irondistribuidora.core import validacao


class TestValidacao(unittest.TestCase):

    def test_email(self):
        self.assertTrue(validacao.email_valido('loja@exemplo.com.br'))
        self.assertFalse(validacao.email_valido('sem-arroba'))
        self.assertFalse(validacao.email_valido(None))
        self.assertEqual(validacao.normalizar_email('  Loja@Exemplo.COM '), 'loja@exemplo.com')

    def test_telefone(self):
        self.assertTrue(validacao.telefone_valido('(48) 99114-7117'))
        self.assertTrue(validacao.telefone_valido('+55 48 99114 7117'))
        self.assertFalse(validacao.telefone_valido('123'))
        self.assertTrue(validacao.telefone_valido(''))

    def test_documento_cpf_ou_cnpj(self):
        self.assertTrue(validacao.documento_valido('123.456.789-01'))
        self.assertTrue(validacao.documento_valido('12.345.678/0001-90'))
        self.assertFalse(validacao.documento_valido('1234'))
        self.assertTrue(validacao.documento_valido(None))

    def test_cep_e_uf(self):
        self.assertTrue(validacao.cep_valido('88000-000'))
        self.assertTrue(validacao.cep_valido('88000000'))
        self.assertFalse(validacao.cep_valido('8800-000'))
        self.assertTrue(validacao.uf_valida('sc'))
        self.assertFalse(validacao.uf_valida('SCX'))

    def test_tamanho_maximo(self):
        self.assertEqual(validacao.validar_tamanho_maximo('abc', 5, 'Nome'), (True, None))
        valido, erro = validacao.validar_tamanho_maximo('abcdef', 5, 'Nome')
        self.assertFalse(valido)
        self.assertIn('5', erro)

    def test_texto_opcional(self):
        self.assertIsNone(validacao.normalizar_texto_opcional('   '))
        self.assertIsNone(validacao.normalizar_texto_opcional(42))
        self.assertEqual(validacao.normalizar_texto_opcional(' apto 3 '), 'apto 3')

    def test_formatacao(self):
        self.assertEqual(validacao.formatar_cep('88000000'), '88000-000')
        self.assertEqual(validacao.formatar_telefone('48991147117'), '(48) 99114-7117')
        self.assertEqual(validacao.formatar_telefone('4832221111'), '(48) 3222-1111')


if __name__ == '__main__':
    unittest.main()
