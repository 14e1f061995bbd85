"""
Unit Tests for the Deploy Engine
"""

import sys
import pytest
from decimal import Decimal
from unittest.mock import Mock, MagicMock, AsyncMock, patch
from loguru import logger

from blockchain.contract_factory import DeployedContract
from deployer.config import DeployConfig
from deployer.deploy_engine import Deployer, CONTRACT_NAME
from deployer.wallet_manager import Signer
from utils.errors import ArtifactNotFoundError, SignerUnavailableError


DEPLOYER_ADDRESS = '0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266'
CONTRACT_ADDRESS = '0x5FbDB2315678afecb367f032d93F642f64180aa3'


@pytest.fixture
def wallet_manager():
    """Mock signer provider with one node account"""
    manager = Mock()
    manager.get_signers = AsyncMock(return_value=[Signer(DEPLOYER_ADDRESS)])
    manager.get_balance = Mock(return_value=Decimal('10000'))
    return manager


@pytest.fixture
def deployed():
    receipt = {
        'status': 1,
        'contractAddress': CONTRACT_ADDRESS,
        'blockNumber': 1,
        'gasUsed': 512000
    }
    return DeployedContract(CONTRACT_NAME, CONTRACT_ADDRESS, '0x' + 'ab' * 32, receipt)


@pytest.fixture
def factory(deployed):
    factory = Mock()
    factory.deploy = AsyncMock(return_value=deployed)
    return factory


@pytest.fixture
def contract_manager(factory):
    manager = Mock()
    manager.get_contract_factory = AsyncMock(return_value=factory)
    return manager


@pytest.fixture
def deployer(wallet_manager, contract_manager):
    return Deployer(
        config=DeployConfig(),
        w3=MagicMock(),
        wallet_manager=wallet_manager,
        contract_manager=contract_manager
    )


class TestDeployerRun:
    """Test the deployment run"""

    @pytest.mark.asyncio
    async def test_success_prints_two_lines(self, deployer, capsys):
        """Successful deployment prints account and contract address"""
        exit_code = await deployer.run()

        assert exit_code == 0

        out = capsys.readouterr().out
        lines = out.splitlines()

        assert lines == [
            f"Deploying contracts with the account: {DEPLOYER_ADDRESS}",
            f"CatDAO Contract Address: {CONTRACT_ADDRESS}"
        ]

    @pytest.mark.asyncio
    async def test_resolves_fixed_contract_name(self, deployer, contract_manager, wallet_manager):
        """Factory is requested for CatDAOContract with the first signer"""
        await deployer.run()

        contract_manager.get_contract_factory.assert_awaited_once()
        name, signer = contract_manager.get_contract_factory.await_args.args

        assert name == 'CatDAOContract'
        assert signer.address == DEPLOYER_ADDRESS

    @pytest.mark.asyncio
    async def test_uses_first_signer(self, deployer, wallet_manager, capsys):
        """Only the first of several signers deploys"""
        other = '0x70997970C51812dc3A010C7d01b50e0d17dc79C8'
        wallet_manager.get_signers = AsyncMock(
            return_value=[Signer(DEPLOYER_ADDRESS), Signer(other)]
        )

        await deployer.run()

        out = capsys.readouterr().out
        assert DEPLOYER_ADDRESS in out
        assert other not in out

    @pytest.mark.asyncio
    async def test_signer_failure(self, deployer, wallet_manager, factory, capsys):
        """Signer lookup failure exits 1 with nothing on stdout"""
        wallet_manager.get_signers = AsyncMock(
            side_effect=SignerUnavailableError("No signer available")
        )

        exit_code = await deployer.run()

        assert exit_code == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "No signer available" in captured.err
        factory.deploy.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_factory_resolution_failure(self, deployer, contract_manager, capsys):
        """Missing artifact exits 1 with nothing on stdout"""
        contract_manager.get_contract_factory = AsyncMock(
            side_effect=ArtifactNotFoundError("Contract artifact not found for CatDAOContract")
        )

        exit_code = await deployer.run()

        assert exit_code == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Contract artifact not found for CatDAOContract" in captured.err

    @pytest.mark.asyncio
    async def test_deployment_failure_is_not_retried(self, deployer, factory, capsys):
        """A failed deployment is attempted exactly once"""
        factory.deploy = AsyncMock(side_effect=ValueError("insufficient funds for gas * price + value"))

        exit_code = await deployer.run()

        assert exit_code == 1
        factory.deploy.assert_awaited_once()

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "insufficient funds for gas * price + value" in captured.err

    @pytest.mark.asyncio
    async def test_one_deployment_per_run(self, deployer, factory):
        """Success deploys exactly once"""
        await deployer.run()

        factory.deploy.assert_awaited_once_with()

    @pytest.mark.asyncio
    async def test_invalid_configuration_exits_1(self, monkeypatch, capsys):
        """Configuration errors are reported like any other failure"""
        monkeypatch.setenv('RECEIPT_TIMEOUT', 'soon')

        exit_code = await Deployer().run()

        assert exit_code == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "RECEIPT_TIMEOUT must be an integer" in captured.err

    @pytest.mark.asyncio
    async def test_connection_failure_exits_1(self, capsys):
        """Unreachable RPC endpoint exits 1"""
        config = DeployConfig(rpc_url='http://127.0.0.1:1')

        with patch('utils.rpc_manager.Web3') as web3_cls:
            web3_cls.return_value.is_connected.return_value = False
            exit_code = await Deployer(config=config).run()

        assert exit_code == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Failed to connect to network at http://127.0.0.1:1" in captured.err


class TestMain:
    """Test process entry point"""

    def test_exit_called_once_with_run_result(self):
        import main

        with patch('main.configure_logging'), \
                patch('main.Deployer') as deployer_cls, \
                patch('main.sys.exit') as exit_mock:
            deployer_cls.return_value.run = AsyncMock(return_value=0)
            main.main()

        exit_mock.assert_called_once_with(0)

    def test_exit_code_1_on_failure(self):
        import main

        with patch('main.configure_logging'), \
                patch('main.Deployer') as deployer_cls, \
                patch('main.sys.exit') as exit_mock:
            deployer_cls.return_value.run = AsyncMock(return_value=1)
            main.main()

        exit_mock.assert_called_once_with(1)


class TestLoggingSetup:
    """Test loguru configuration"""

    @pytest.fixture(autouse=True)
    def restore_logger(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        yield
        logger.remove()
        logger.add(sys.__stderr__)

    def test_unknown_level_falls_back_to_info(self, tmp_path, monkeypatch):
        import main

        monkeypatch.setenv('LOG_LEVEL', 'chatty')

        main.configure_logging()
        logger.debug("debug record")
        logger.remove()

        log = (tmp_path / 'data' / 'logs' / 'deploy.log').read_text()
        assert "Unknown LOG_LEVEL 'CHATTY', using INFO" in log
        assert "debug record" in log

    def test_known_level_accepted(self, tmp_path, monkeypatch):
        import main

        monkeypatch.setenv('LOG_LEVEL', 'debug')

        main.configure_logging()
        logger.remove()

        log = (tmp_path / 'data' / 'logs' / 'deploy.log').read_text()
        assert "Unknown LOG_LEVEL" not in log


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
