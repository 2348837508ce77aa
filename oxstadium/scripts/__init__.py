"""
Deployment Scripts
==================

Scripts for deploying the OXStadium contract.

Structure:
- config.py: network presets and .env settings
- deploy.py: deployment with balance and transaction logging
- deploy_mainnet.py / deploy_testnet.py: one-command deployments
"""
